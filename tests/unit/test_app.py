"""
Unit Tests for the Application Factory
"""
import importlib

import mtor.app


class TestCreateApp:

    def test_import_builds_nothing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        importlib.reload(mtor.app)
        assert list(tmp_path.iterdir()) == []
        assert not hasattr(mtor.app, "app")

    def test_container_per_app(self, test_settings):
        first = mtor.app.create_app(test_settings)
        second = mtor.app.create_app(test_settings)
        assert first.state.services is not second.state.services
        assert first.state.settings is test_settings
