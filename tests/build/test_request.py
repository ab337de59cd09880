"""
Tests for TargetBuildRequest.
"""

import pytest

from cargojni.config.features import UnsetFeatures


class TestTargetBuildRequest:
    def test_defaults(self, make_request):
        request = make_request()

        assert request.platform == "arm64"
        assert request.profile == "debug"
        assert request.features == UnsetFeatures()
        assert request.verbose is None
        assert request.export_target_dir is False

    def test_default_includes(self, make_request):
        assert make_request(libname="core").include_patterns() == (
            "libcore.so",
            "libcore.dylib",
            "core.dll",
        )

    def test_custom_includes(self, make_request):
        request = make_request(target_includes=("*.so", "*.a"))
        assert request.include_patterns() == ("*.so", "*.a")

    def test_empty_includes_fall_back_to_defaults(self, make_request):
        request = make_request(target_includes=())
        assert request.include_patterns() == request.default_includes()

    def test_frozen(self, make_request):
        request = make_request()
        with pytest.raises(AttributeError):
            request.api_level = 30
