"""
Tests for feature selection and profile flags.
"""

import pytest

from cargojni.config.features import (
    AllFeatures,
    DefaultAnd,
    FeatureSelection,
    NoDefaultBut,
    UnsetFeatures,
    profile_args,
    profile_dir_name,
)


class TestFeatureSelection:
    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            FeatureSelection()

    def test_policies_are_feature_selections(self):
        assert isinstance(NoDefaultBut(["jni"]), FeatureSelection)

    def test_unset(self):
        assert UnsetFeatures().to_args() == []

    def test_all(self):
        assert AllFeatures().to_args() == ["--all-features"]

    def test_default_and_joins_names(self):
        assert DefaultAnd(["jni", "log"]).to_args() == ["--features", "jni log"]

    def test_default_and_empty_emits_nothing(self):
        assert DefaultAnd([]).to_args() == []

    def test_no_default_but(self):
        assert NoDefaultBut(["jni"]).to_args() == [
            "--no-default-features",
            "--features",
            "jni",
        ]

    def test_no_default_but_empty(self):
        assert NoDefaultBut().to_args() == ["--no-default-features"]

    def test_duplicates_removed_keeping_order(self):
        selection = DefaultAnd(["b", "a", "b"])
        assert selection.features == ("b", "a")
        assert selection == DefaultAnd(["b", "a"])

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DefaultAnd(["a"]).features = ("b",)


class TestProfiles:
    @pytest.mark.parametrize(
        "profile,expected",
        [
            ("debug", []),
            ("release", ["--release"]),
            ("bench", ["--profile=bench"]),
            ("release-lto", ["--profile=release-lto"]),
        ],
    )
    def test_profile_args(self, profile, expected):
        assert profile_args(profile) == expected

    @pytest.mark.parametrize(
        "profile,expected",
        [
            ("debug", "debug"),
            ("dev", "debug"),
            ("test", "debug"),
            ("release", "release"),
            ("bench", "release"),
            ("release-lto", "release-lto"),
        ],
    )
    def test_profile_dir_name(self, profile, expected):
        assert profile_dir_name(profile) == expected
