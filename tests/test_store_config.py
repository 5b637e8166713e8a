"""Unit tests for store_config and autostart – files under a temporary XDG root."""

from autostart import Autostart, desktop_entry_text, quote_exec_arg
from store_config import ConfigStore, decode_names, encode_names


def test_config_is_created_with_defaults(config_home):
    store = ConfigStore()
    cfg = store.load()

    assert store.file_path == config_home / "aSwitch" / "aswitch.cfg"
    assert store.file_path.exists()
    assert cfg.get("Devices", "hidden") == "[]"
    assert cfg.get("App", "last_exe_path") == ""


def test_missing_sections_are_filled_in(config_home):
    store = ConfigStore()
    store.dir_path.mkdir(parents=True)
    store.file_path.write_text("[Other]\nkey = value\n", encoding="utf-8")

    assert store.hidden_names() == []
    assert store.last_exe_path() == ""


def test_hidden_names_round_trip(config_home):
    store = ConfigStore()
    store.set_hidden_names(["b", "a", "a"])
    assert store.hidden_names() == ["a", "b"]


def test_garbage_hidden_value_reads_as_empty():
    assert decode_names("not json") == []
    assert decode_names('{"a": 1}') == []
    assert decode_names('["ok", 3, ""]') == ["ok"]
    assert decode_names(encode_names(["x"])) == ["x"]


def test_record_last_exe_path(config_home, monkeypatch):
    exe = config_home / "bin" / "aswitch"
    monkeypatch.setattr("sys.argv", [str(exe)])

    store = ConfigStore()
    store.record_last_exe_path()
    assert store.last_exe_path() == str(exe.resolve())


def test_autostart_toggle(config_home):
    auto = Autostart(exec_path="/opt/a switch/aswitch")
    assert auto.is_enabled() is False

    assert auto.toggle() is True
    assert auto.file_path == config_home / "autostart" / "aswitch.desktop"
    text = auto.file_path.read_text(encoding="utf-8")
    assert 'Exec="/opt/a switch/aswitch"\n' in text

    assert auto.toggle() is False
    assert not auto.file_path.exists()


def test_autostart_without_executable_stays_off(config_home):
    auto = Autostart(exec_path="")
    assert auto.set_enabled(True) is False
    assert auto.is_enabled() is False


def test_desktop_entry_fields():
    text = desktop_entry_text("/usr/bin/aswitch")
    assert text.startswith("[Desktop Entry]\n")
    assert "Type=Application\n" in text
    assert 'Exec="/usr/bin/aswitch"\n' in text


def test_exec_argument_uses_desktop_entry_quoting():
    assert quote_exec_arg("/opt/a switch/aswitch") == '"/opt/a switch/aswitch"'
    assert quote_exec_arg('/tmp/$HOME/"x"`y`') == '"/tmp/\\$HOME/\\"x\\"\\`y\\`"'
    assert quote_exec_arg("C:\\bin") == '"C:\\\\bin"'
    assert quote_exec_arg("/opt/100%/aswitch") == '"/opt/100%%/aswitch"'
