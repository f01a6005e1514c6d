"""Tests for VirtualPathMapper — last-dot splitting and reference rewriting."""

from __future__ import annotations

import pytest

from webpforge.core.path_mapper import InvalidPathError, VirtualPathMapper


@pytest.fixture
def mapper() -> VirtualPathMapper:
    return VirtualPathMapper()


class TestAccessors:
    def test_extension_of(self, mapper):
        assert mapper.extension_of("/a/icon.png") == ".png"

    def test_multi_dot_splits_on_last(self, mapper):
        assert mapper.extension_of("/a/icon.min.png") == ".png"
        assert mapper.stem_of("/a/icon.min.png") == "/a/icon.min"

    def test_dot_in_directory_only_is_invalid(self, mapper):
        with pytest.raises(InvalidPathError):
            mapper.stem_of("/a.b/icon")

    @pytest.mark.parametrize("path", ["icon", "/a/icon", "icon.", "/a/.png", ""])
    def test_no_extension_fails_fast(self, mapper, path):
        with pytest.raises(InvalidPathError):
            mapper.extension_of(path)

    def test_require_extension(self, mapper):
        mapper.require_extension("@/img/icon.webp")
        with pytest.raises(InvalidPathError):
            mapper.require_extension("dir/.webp")

    def test_split_name(self, mapper):
        assert mapper.split_name("/a/b/icon.png") == ("/a/b", "icon.png")
        assert mapper.split_name("/icon.png") == ("/", "icon.png")
        assert mapper.split_name("icon.png") == ("", "icon.png")

    def test_join(self, mapper):
        assert mapper.join("/a/b", "x.webp") == "/a/b/x.webp"
        assert mapper.join("/", "x.webp") == "/x.webp"
        assert mapper.join("", "x.webp") == "x.webp"


class TestTransformations:
    def test_strip_virtual_extension(self, mapper):
        assert mapper.strip_virtual_extension("@/img/icon.webp") == "@/img/icon"

    def test_strip_is_identity_otherwise(self, mapper):
        assert mapper.strip_virtual_extension("@/img/icon.png") == "@/img/icon.png"

    def test_derive_virtual_artifact_path(self, mapper):
        assert mapper.derive_virtual_artifact_path("/src/img/icon.png") == "/src/img/icon.webp"

    def test_derive_rejects_dotless(self, mapper):
        with pytest.raises(InvalidPathError):
            mapper.derive_virtual_artifact_path("/src/img/icon")

    def test_with_content_tag(self, mapper):
        assert mapper.with_content_tag("icon.webp", "a1b2c3") == "icon.a1b2c3.webp"
        assert mapper.with_content_tag("@/img/a.b.webp", "ff00ff") == "@/img/a.b.ff00ff.webp"

    def test_with_real_extension_keeps_alias(self, mapper):
        assert mapper.with_real_extension("@/img/icon.webp", ".jpg") == "@/img/icon.jpg"

    def test_with_real_extension_requires_virtual(self, mapper):
        with pytest.raises(InvalidPathError):
            mapper.with_real_extension("@/img/icon.png", ".jpg")

    def test_custom_virtual_extension(self):
        avif = VirtualPathMapper(".avif")
        assert avif.strip_virtual_extension("icon.avif") == "icon"
        assert avif.derive_virtual_artifact_path("/x/icon.png") == "/x/icon.avif"

    @pytest.mark.parametrize("ext", ["webp", ".", ""])
    def test_bad_virtual_extension(self, ext):
        with pytest.raises(InvalidPathError):
            VirtualPathMapper(ext)


class TestArtifactPattern:
    def test_matches_tagged_names(self, mapper):
        pattern = mapper.artifact_name_pattern("icon", 6)
        assert pattern.match("icon.a1b2c3.webp")
        assert not pattern.match("icon.webp")
        assert not pattern.match("icon.a1b2c3d.webp")
        assert not pattern.match("icon.A1B2C3.webp")
        assert not pattern.match("xicon.a1b2c3.webp")

    def test_stem_is_escaped(self, mapper):
        pattern = mapper.artifact_name_pattern("a+b", 2)
        assert pattern.match("a+b.ff.webp")
        assert not pattern.match("aab.ff.webp")
