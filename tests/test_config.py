import pytest

from pingpong.config import Config, ConfigError, Host


def test_default_config_values():
    config = Config.default()
    assert [h.address for h in config.hosts] == ["8.8.8.8", "1.1.1.1", "google.com"]
    assert config.ping.history_size == 300
    assert config.ping.timeout == 3.0
    assert config.ui.theme == "auto"
    assert all(h.enabled and h.interval is None for h in config.hosts)


def test_save_and_load_round_trip(tmp_path):
    config = Config.default()
    config.hosts[1].interval = 2.5
    config.hosts[2].enabled = False
    path = tmp_path / "pingpong.toml"
    config.save(path)
    assert Config.load(path) == config


def test_dict_round_trip_omits_unset_interval():
    config = Config.default()
    data = config.to_dict()
    assert all("interval" not in host for host in data["hosts"])
    assert Config.from_dict(data) == config


def test_add_host_ip_address():
    config = Config.default()
    config.add_host("10.0.0.1")
    host = config.hosts[-1]
    assert host == Host(name="IP 10.0.0.1", address="10.0.0.1", enabled=True, interval=None)


def test_add_host_hostname_uses_address_as_name():
    config = Config.default()
    config.add_host("example.com")
    assert config.hosts[-1].name == "example.com"
    assert config.hosts[-1].address == "example.com"


def test_set_interval():
    config = Config.default()
    config.set_interval(0.25)
    assert config.ping.interval == 0.25


def test_enabled_hosts_filters_disabled():
    config = Config.default()
    config.hosts[0].enabled = False
    assert [h.address for h in config.enabled_hosts()] == ["1.1.1.1", "google.com"]


def test_defaults_applied_when_fields_missing(tmp_path):
    path = tmp_path / "c.toml"
    path.write_text(
        "[ping]\ninterval = 2\ntimeout = 1.5\nhistory_size = 10\npacket_size = 64\n"
        "[[hosts]]\nname = \"a\"\naddress = \"example.com\"\n"
        "[ui]\nrefresh_rate = 50\ntheme = \"dark\"\ngraph_height = 5\n",
        encoding="utf-8",
    )
    config = Config.load(path)
    assert config.hosts[0].enabled is True
    assert config.ui.show_details is True
    assert config.ping.interval == 2.0
    assert config.ui.refresh_rate == 50


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read"):
        Config.load(tmp_path / "absent.toml")


def test_load_invalid_toml_raises(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("this is = = not toml", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        Config.load(path)


def test_missing_section_raises():
    data = Config.default().to_dict()
    del data["ui"]
    with pytest.raises(ConfigError):
        Config.from_dict(data)


def test_out_of_range_packet_size_raises():
    data = Config.default().to_dict()
    data["ping"]["packet_size"] = 70000
    with pytest.raises(ConfigError):
        Config.from_dict(data)