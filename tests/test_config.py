import json

from assetnav.config import Settings, default_settings, load_settings


def write_settings(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return str(path)


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings()
        defaults = default_settings()
        assert settings.asset_root == defaults["asset_root"]
        assert settings.sidebar_depth == 3
        assert settings.sidebar_exclude == ["RFI"]
        assert settings.public_prefix == "/assets"
        assert settings.project_registry is None

    def test_file_values_merge_over_defaults(self, tmp_path):
        path = write_settings(tmp_path, {"asset_root": "/srv/assets", "sidebar_depth": 5})
        settings = load_settings(settings_path=path)
        assert settings.asset_root == "/srv/assets"
        assert settings.sidebar_depth == 5
        assert settings["files_subdir"] == "files"

    def test_settings_path_from_environment(self, tmp_path, monkeypatch):
        path = write_settings(tmp_path, {"sidebar_exclude": ["RFI", "Archive"]})
        monkeypatch.setenv("ASSETNAV_SETTINGS", path)
        assert load_settings().sidebar_exclude == ["RFI", "Archive"]

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = write_settings(tmp_path, {"asset_root": "/from/file"})
        monkeypatch.setenv("ASSETNAV_ROOT", "/from/env")
        monkeypatch.setenv("ASSETNAV_PROJECTS", "/data/projects.json")
        settings = load_settings(settings_path=path)
        assert settings.asset_root == "/from/env"
        assert settings.project_registry == "/data/projects.json"

    def test_root_argument_wins(self, monkeypatch):
        monkeypatch.setenv("ASSETNAV_ROOT", "/from/env")
        assert load_settings(root="/from/arg").asset_root == "/from/arg"

    def test_invalid_json_keeps_defaults(self, tmp_path):
        path = write_settings(tmp_path, "{not json")
        assert load_settings(settings_path=path).sidebar_depth == 3

    def test_non_object_ignored(self, tmp_path):
        path = write_settings(tmp_path, [1, 2, 3])
        assert load_settings(settings_path=path).sidebar_exclude == ["RFI"]


class TestSettingsValidation:

    def test_invalid_depth_replaced(self):
        assert Settings({"sidebar_depth": -1}).sidebar_depth == 3
        assert Settings({"sidebar_depth": "deep"}).sidebar_depth == 3
        assert Settings({"sidebar_depth": True}).sidebar_depth == 3

    def test_zero_depth_allowed(self):
        assert Settings({"sidebar_depth": 0}).sidebar_depth == 0

    def test_invalid_exclude_replaced(self):
        assert Settings({"sidebar_exclude": "RFI"}).sidebar_exclude == ["RFI"]
        assert Settings({"sidebar_exclude": ["", "Old"]}).sidebar_exclude == ["Old"]

    def test_public_prefix(self):
        assert Settings({"public_prefix": "static"}).public_prefix == "/assets"
        assert Settings({"public_prefix": "/static/"}).public_prefix == "/static"

    def test_files_root(self):
        settings = Settings({"asset_root": "/srv/assets"})
        assert settings.files_root.replace("\\", "/") == "/srv/assets/files"
