import pytest

from pingpong.cli import AnimationChoice, build_config, parse_args
from pingpong.config import Config
from pingpong.tui import AnimationType


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config == "pingpong.toml"
    assert args.interval == 1.0
    assert args.host == []
    assert args.animation is None


def test_parse_args_collects_repeated_hosts():
    args = parse_args(["--host", "10.0.0.1", "--host", "example.com", "-i", "2.5"])
    assert args.host == ["10.0.0.1", "example.com"]
    assert args.interval == 2.5


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("plasma", AnimationType.PLASMA),
        ("globe", AnimationType.GLOBE),
        ("bounce", AnimationType.BOUNCING_LOGO),
        ("matrix", AnimationType.MATRIX),
        ("dna", AnimationType.DNA),
        ("waveform", AnimationType.WAVEFORM),
    ],
)
def test_animation_choice_maps_to_type(name, expected):
    args = parse_args(["--animation", name])
    assert args.animation is AnimationChoice(name)
    assert args.animation.to_animation_type() is expected


def test_parse_args_rejects_unknown_animation():
    with pytest.raises(SystemExit):
        parse_args(["-a", "fireworks"])


def test_build_config_falls_back_to_default(tmp_path):
    args = parse_args(["-c", str(tmp_path / "missing.toml")])
    assert build_config(args) == Config.default()


def test_build_config_adds_hosts_and_interval(tmp_path):
    args = parse_args(
        ["-c", str(tmp_path / "missing.toml"), "--host", "10.0.0.1", "--host", "example.com", "-i", "2.5"]
    )
    config = build_config(args)
    assert config.ping.interval == 2.5
    assert [h.address for h in config.hosts[-2:]] == ["10.0.0.1", "example.com"]
    assert config.hosts[-2].name == "IP 10.0.0.1"
    assert config.hosts[-1].name == "example.com"
    assert len(config.hosts) == len(Config.default().hosts) + 2


def test_build_config_keeps_file_interval_when_default_given(tmp_path):
    path = tmp_path / "pingpong.toml"
    saved = Config.default()
    saved.set_interval(5.0)
    saved.hosts = saved.hosts[:1]
    saved.save(path)

    config = build_config(parse_args(["--config", str(path)]))
    assert config == saved
    assert config.ping.interval == 5.0