"""Tests for the device accessors built on configResolve*/configConfMo."""

import pytest

from conftest import reply
from imc_codec import Operation
from imc_errors import IMCTimeoutError
from imc_xmlapi_lib import OPTION_ROM_POST_WAIT, xml_api_lib


def resolve_dn(objects):
    """Answer configResolveDn from a {dn: inner_xml} table."""
    def handler(request):
        dn = request.get("dn")
        return reply("configResolveDn", f"<outConfig>{objects[dn]}</outConfig>", dn=dn)
    return handler


def resolve_class(objects):
    """Answer configResolveClass from a {classId: inner_xml} table."""
    def handler(request):
        class_id = request.get("classId")
        return reply("configResolveClass", f"<outConfigs>{objects[class_id]}</outConfigs>", classId=class_id)
    return handler


def conf_mo(request):
    config = request.find("inConfig")[0]
    attrs = " ".join(f'{key}="{value}"' for key, value in config.attrib.items())
    return reply("configConfMo", f"<outConfig><{config.tag} {attrs}/></outConfig>", dn=request.get("dn"))


def power(state):
    return f'<computeRackUnit dn="sys/rack-unit-1" operPower="{state}"/>'


@pytest.fixture
def read_only(transport):
    return xml_api_lib("10.0.0.10", "admin", "password", read_only=True, transport=transport)


class TestConfigResolve:
    def test_resolve_dn_returns_out_config(self, logged_in, transport):
        transport.handlers["configResolveDn"] = resolve_dn({
            "sys/rack-unit-1/locator-led": '<equipmentLocatorLed dn="sys/rack-unit-1/locator-led" operState="off"/>',
        })

        out_config = logged_in.config_resolve_dn("sys/rack-unit-1/locator-led", in_hierarchical="yes")

        assert out_config["equipmentLocatorLed"][0]["operState"] == "off"
        assert transport.sent("configResolveDn")[0].get("inHierarchical") == "true"

    def test_resolve_children_sends_in_dn_and_class(self, logged_in, transport):
        transport.handlers["configResolveChildren"] = lambda request: reply(
            "configResolveChildren",
            '<outConfigs><adaptorHostEthIf dn="sys/rack-unit-1/adaptor-1/host-eth-eth0" name="eth0"/></outConfigs>')

        vnics = logged_in.get_vnic_settings(vnic_type="host", adaptor_dn="sys/rack-unit-1/adaptor-1")

        assert [vnic["name"] for vnic in vnics] == ["eth0"]
        request = transport.sent("configResolveChildren")[0]
        assert request.get("inDn") == "sys/rack-unit-1/adaptor-1"
        assert request.get("classId") == "adaptorHostEthIf"
        assert request.get("inHierarchical") == "true"

    def test_class_id_only_allowed_for_children(self, logged_in, transport):
        with pytest.raises(ValueError):
            logged_in._config_resolve(Operation.CONFIG_RESOLVE_DN, "sys", None, "topSystem")
        assert transport.requests == []

    def test_missing_out_config_returns_empty(self, logged_in, transport):
        transport.handlers["configResolveClass"] = lambda request: reply("configResolveClass")

        assert logged_in.get_vmedia_maps() == []

    def test_unknown_vnic_type_is_rejected(self, logged_in):
        with pytest.raises(ValueError):
            logged_in.get_vnic_settings(vnic_type="infiniband")


class TestConfigConfMo:
    def test_sends_in_config_under_dn(self, logged_in, transport):
        transport.handlers["configConfMo"] = conf_mo

        out_config = logged_in.set_indicator_led("on")

        assert out_config["equipmentLocatorLed"][0]["adminState"] == "on"
        request = transport.sent("configConfMo")[0]
        assert request.get("dn") == "sys/rack-unit-1/locator-led"
        assert request.find("inConfig/equipmentLocatorLed").get("adminState") == "on"

    def test_rejects_non_mapping_config(self, logged_in):
        with pytest.raises(ValueError):
            logged_in.config_conf_mo("adminState=on", "sys/rack-unit-1/locator-led")

    def test_read_only_returns_input_without_transport(self, read_only, transport):
        in_config = {"topSystem": {"dn": "sys", "timeZone": "America/Chicago"}}

        assert read_only.config_conf_mo(in_config, "sys") is in_config
        assert transport.requests == []
        assert transport.pings == 0

    def test_read_only_setter_returns_proposed_config(self, read_only, transport):
        result = read_only.set_indicator_led("off")

        assert result == {"equipmentLocatorLed": {"dn": "sys/rack-unit-1/locator-led", "adminState": "off"}}
        assert transport.requests == []


class TestPowerMode:
    @pytest.mark.parametrize("state,mode,expected", [
        ("off", "up", "up"),
        ("off", "cycle-immediate", "up"),
        ("off", "hard-reset-immediate", "up"),
        ("off", "cmos-reset-immediate", "cmos-reset-immediate"),
        ("on", "down", "down"),
        ("on", "soft-shut-down", "soft-shut-down"),
        ("on", "diagnostic-interrupt", "diagnostic-interrupt"),
        ("on", "bmc-reset-immediate", "bmc-reset-immediate"),
    ])
    def test_transition_table(self, logged_in, transport, state, mode, expected):
        transport.handlers["configResolveDn"] = resolve_dn({"sys/rack-unit-1": power(state)})
        transport.handlers["configConfMo"] = conf_mo

        assert logged_in.set_power_mode(mode) is not None
        request = transport.sent("configConfMo")[0]
        assert request.find("inConfig/computeRackUnit").get("adminPower") == expected

    @pytest.mark.parametrize("state,mode", [
        ("on", "up"),
        ("off", "down"),
        ("off", "diagnostic-interrupt"),
    ])
    def test_inapplicable_mode_does_nothing(self, logged_in, transport, state, mode):
        transport.handlers["configResolveDn"] = resolve_dn({"sys/rack-unit-1": power(state)})

        assert logged_in.set_power_mode(mode) is None
        assert transport.sent("configConfMo") == []

    def test_unknown_oper_power_still_attempts(self, logged_in, transport):
        transport.handlers["configResolveDn"] = resolve_dn({"sys/rack-unit-1": power("unknown")})
        transport.handlers["configConfMo"] = conf_mo

        logged_in.set_power_mode("down")

        assert transport.sent("configConfMo")[0].find("inConfig/computeRackUnit").get("adminPower") == "down"

    def test_unknown_mode_is_rejected(self, logged_in, transport):
        with pytest.raises(ValueError):
            logged_in.set_power_mode("explode")
        assert transport.requests == []

    def test_get_power_mode(self, logged_in, transport):
        transport.handlers["configResolveDn"] = resolve_dn({"sys/rack-unit-1": power("on")})

        assert logged_in.get_power_mode() == "on"


class TestFirmwareUpdate:
    def status(self, overall, start="", end=""):
        return (
            '<huuFirmwareUpdater dn="sys/huu/firmwareUpdater">'
            f'<huuFirmwareUpdateStatus overallStatus="{overall}" updateStartTime="{start}" updateEndTime="{end}"/>'
            '</huuFirmwareUpdater>'
        )

    @pytest.mark.parametrize("overall,start,end,done", [
        ("Update in progress", "Mon Jan  1 10:00:00 2024", "", False),
        ("In Progress", "", "", False),
        ("Completed successfully", "Mon Jan  1 10:00:00 2024", "Mon Jan  1 10:40:00 2024", True),
        ("", "", "", True),
    ])
    def test_check_status(self, logged_in, transport, overall, start, end, done):
        transport.handlers["configResolveClass"] = resolve_class({"huuFirmwareUpdater": self.status(overall, start, end)})

        assert logged_in.check_firmware_update_status() is done

    def test_update_triggers_and_waits(self, logged_in, transport, sleeps):
        statuses = [self.status("Update in progress", "t0"), self.status("Completed successfully", "t0", "t1")]
        transport.handlers["configConfMo"] = conf_mo
        transport.handlers["configResolveClass"] = lambda request: reply(
            "configResolveClass", f"<outConfigs>{statuses.pop(0)}</outConfigs>")

        logged_in.update_firmware({"remoteIp": "10.0.0.5", "remoteShare": "/isos/huu.iso", "mapType": "nfs"})

        updater = transport.sent("configConfMo")[0].find("inConfig/huuFirmwareUpdater")
        assert updater.get("adminState") == "trigger"
        assert updater.get("remoteIp") == "10.0.0.5"
        assert updater.get("updateComponent") == "all"
        assert updater.get("timeOut") == "120"
        assert transport.sent("configConfMo")[0].get("inHierarchical") == "true"
        assert statuses == []

    def test_wait_raises_when_update_never_finishes(self, logged_in, transport, monkeypatch):
        monkeypatch.setattr("imc_xmlapi_lib.FIRMWARE_UPDATE_WAIT", 10)
        transport.handlers["configResolveClass"] = resolve_class({"huuFirmwareUpdater": self.status("Update in progress", "t0")})

        with pytest.raises(IMCTimeoutError):
            logged_in.wait_for_firmware_update_completion()

    def test_read_only_update_does_not_wait(self, read_only, transport, sleeps):
        result = read_only.update_firmware({"remoteIp": "10.0.0.5", "remoteShare": "/isos/huu.iso"})

        assert result["huuFirmwareUpdater"]["remoteShare"] == "/isos/huu.iso"
        assert transport.requests == []
        assert sleeps == []


class TestStorage:
    HBA = "sys/rack-unit-1/board/storage-SAS-SLOT-HBA"

    def test_jbod_mode_already_set_is_left_alone(self, logged_in, transport):
        transport.handlers["configResolveDn"] = resolve_dn({
            f"{self.HBA}/controller-settings": '<storageControllerSettings enableJbod="true"/>',
        })

        assert logged_in.set_hba_adaptor_jbod_mode(self.HBA, "on") is True
        assert transport.sent("configConfMo") == []

    def test_jbod_mode_change_powers_up_and_polls(self, logged_in, transport, sleeps):
        settings = ["false", "false", "true"]
        objects = {"sys/rack-unit-1": power("off")}

        def handler(request):
            dn = request.get("dn")
            if dn.endswith("controller-settings"):
                inner = f'<storageControllerSettings enableJbod="{settings.pop(0)}"/>'
            else:
                inner = objects[dn]
            return reply("configResolveDn", f"<outConfig>{inner}</outConfig>")
        transport.handlers["configResolveDn"] = handler
        transport.handlers["configConfMo"] = conf_mo

        assert logged_in.set_hba_adaptor_jbod_mode(self.HBA, True) is True

        changes = [request.find("inConfig")[0] for request in transport.sent("configConfMo")]
        assert changes[0].get("adminPower") == "up"
        assert changes[1].get("adminAction") == "enable-jbod"
        assert OPTION_ROM_POST_WAIT in sleeps

    def test_physical_drives_already_jbod_are_skipped(self, logged_in, transport):
        transport.handlers["configResolveClass"] = resolve_class({
            "storageLocalDisk": (
                f'<storageLocalDisk dn="{self.HBA}/pd-1" pdStatus="JBOD"/>'
                f'<storageLocalDisk dn="{self.HBA}/pd-2" pdStatus="Unconfigured Good"/>'
            ),
        })
        transport.handlers["configConfMo"] = conf_mo

        logged_in.set_hba_physical_drives_jbod_mode()

        changes = transport.sent("configConfMo")
        assert [request.get("dn") for request in changes] == [f"{self.HBA}/pd-2"]
        assert changes[0].find("inConfig/storageLocalDisk").get("adminAction") == "make-jbod"

    def test_remove_virtual_drives(self, logged_in, transport):
        transport.handlers["configResolveClass"] = resolve_class({
            "storageVirtualDrive": f'<storageVirtualDrive dn="{self.HBA}/vd-0"/><storageVirtualDrive dn="{self.HBA}/vd-1"/>',
        })
        transport.handlers["configConfMo"] = conf_mo

        assert logged_in.remove_hba_virtual_drives() is True
        assert [request.get("dn") for request in transport.sent("configConfMo")] == [f"{self.HBA}/vd-0", f"{self.HBA}/vd-1"]


class TestSystem:
    def test_set_hostname_skips_when_unchanged(self, logged_in, transport):
        transport.handlers["configResolveDn"] = resolve_dn({
            "sys/rack-unit-1/mgmt/if-1": '<mgmtIf dn="sys/rack-unit-1/mgmt/if-1" hostname="rack-06-01"/>',
        })

        assert logged_in.set_hostname("rack-06-01") is True
        assert transport.sent("configConfMo") == []

    def test_set_hostname_waits_for_device(self, logged_in, transport, sleeps):
        transport.handlers["configResolveDn"] = resolve_dn({
            "sys/rack-unit-1/mgmt/if-1": '<mgmtIf dn="sys/rack-unit-1/mgmt/if-1" hostname="old-name"/>',
            "sys": '<topSystem dn="sys" name="new-name" timeZone="UTC"/>',
        })
        transport.handlers["configConfMo"] = conf_mo

        assert logged_in.set_hostname("new-name") is True
        assert transport.sent("configConfMo")[0].find("inConfig/mgmtIf").get("hostname") == "new-name"
        assert transport.sent("configResolveDn")[-1].get("dn") == "sys"

    def test_get_timezone(self, logged_in, transport):
        transport.handlers["configResolveDn"] = resolve_dn({"sys": '<topSystem dn="sys" timeZone="America/Chicago"/>'})

        assert logged_in.get_timezone() == "America/Chicago"

    def test_reset_vnic_adaptors(self, logged_in, transport):
        transport.handlers["configResolveClass"] = resolve_class({
            "adaptorUnit": '<adaptorUnit dn="sys/rack-unit-1/adaptor-1"/><adaptorUnit dn="sys/rack-unit-1/adaptor-2"/>',
        })
        transport.handlers["configConfMo"] = conf_mo

        logged_in.reset_vnic_adaptors()

        changes = transport.sent("configConfMo")
        assert len(changes) == 2
        assert changes[0].find("inConfig/adaptorUnit").get("adminState") == "adaptor-reset-default"

    def test_remove_vmedia_maps(self, logged_in, transport):
        transport.handlers["configResolveClass"] = resolve_class({
            "commVMediaMap": '<commVMediaMap dn="sys/svc-ext/vmedia-svc/vmmap-huu" volumeName="huu"/>',
        })
        transport.handlers["configConfMo"] = conf_mo

        logged_in.remove_vmedia_maps()

        change = transport.sent("configConfMo")[0].find("inConfig/commVMediaMap")
        assert change.get("status") == "deleted"
