"""Tests for layered configuration loading."""

from pathlib import Path

from arbor.config import get_config, get_config_path, load_config, reset_config


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "xdg" / "arbor" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(text)
    return path


class TestDefaults:
    def test_defaults(self):
        cfg = load_config()
        assert cfg.store.path == ""
        assert cfg.store.format == ""
        assert cfg.render.pretty is True
        assert cfg.render.indent == "  "

    def test_default_registry_path_under_xdg(self, tmp_path):
        cfg = load_config()
        assert cfg.store.resolved_path == tmp_path / "xdg" / "arbor" / "registry.json"

    def test_config_path_respects_xdg(self, tmp_path):
        assert get_config_path() == tmp_path / "xdg" / "arbor" / "config.toml"


class TestTomlFile:
    def test_file_values(self, tmp_path):
        write_config(tmp_path, (
            '[store]\npath = "/data/reg.xml"\nformat = "xml"\n'
            '[render]\npretty = false\nindent = "\\t"\n'
        ))
        cfg = load_config()
        assert cfg.store.path == "/data/reg.xml"
        assert cfg.store.format == "xml"
        assert cfg.render.pretty is False
        assert cfg.render.indent == "\t"

    def test_broken_file_falls_back_to_defaults(self, tmp_path):
        write_config(tmp_path, "[store\npath = ")
        cfg = load_config()
        assert cfg.store.path == ""
        assert cfg.render.pretty is True

    def test_scalar_sections_ignored(self, tmp_path):
        write_config(tmp_path, 'store = 1\nrender = "x"\n')
        cfg = get_config()
        assert cfg.store.path == ""
        assert cfg.render.indent == "  "

    def test_tilde_expanded(self, tmp_path):
        write_config(tmp_path, '[store]\npath = "~/reg.json"\n')
        cfg = load_config()
        assert cfg.store.resolved_path == Path.home() / "reg.json"


class TestEnvOverrides:
    def test_env_beats_file(self, tmp_path, monkeypatch):
        write_config(tmp_path, '[store]\nformat = "xml"\n')
        monkeypatch.setenv("ARBOR_STORE_FORMAT", "records")
        monkeypatch.setenv("ARBOR_STORE_PATH", "/tmp/r.json")
        assert load_config().store.format == "records"
        assert load_config().store.path == "/tmp/r.json"

    def test_bool_env(self, monkeypatch):
        monkeypatch.setenv("ARBOR_PRETTY", "no")
        assert load_config().render.pretty is False
        monkeypatch.setenv("ARBOR_PRETTY", "YES")
        assert load_config().render.pretty is True


class TestCaching:
    def test_get_config_is_cached(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("ARBOR_STORE_FORMAT", "xml")
        assert get_config() is first
        reset_config()
        assert get_config().store.format == "xml"
