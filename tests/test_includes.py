"""Tests for @include() resolution"""

from pathlib import Path

from agentc.core.includes import find_directives, resolve_file, resolve_includes


class TestFindDirectives:
    """Test directive scanning"""

    def test_no_directives(self):
        assert find_directives("plain markdown\n") == []

    def test_strips_whitespace_in_path(self):
        directives = find_directives("a @include(  partials/x.md ) b")
        assert len(directives) == 1
        assert directives[0].target == "partials/x.md"
        assert directives[0].raw == "@include(  partials/x.md )"

    def test_offsets_point_at_raw_text(self):
        text = "start @include(one.md) middle @include(two.md) end"
        directives = find_directives(text)
        assert [d.target for d in directives] == ["one.md", "two.md"]
        for d in directives:
            assert text[d.start : d.end] == d.raw

    def test_empty_parentheses_not_a_directive(self):
        assert find_directives("@include()") == []


class TestResolveIncludes:
    """Test recursive expansion"""

    def test_unchanged_without_directives(self, temp_dir: Path):
        result = resolve_includes("nothing here", temp_dir)
        assert result.content == "nothing here"
        assert result.included == []
        assert result.diagnostics == []

    def test_simple_include(self, temp_dir: Path):
        (temp_dir / "part.md").write_text("PART", encoding="utf-8")

        result = resolve_includes("before @include(part.md) after", temp_dir)

        assert result.content == "before PART after"
        assert result.included == [(temp_dir / "part.md").resolve()]

    def test_nested_include_resolves_relative_to_included_file(self, temp_dir: Path):
        nested = temp_dir / "partials" / "deep"
        nested.mkdir(parents=True)
        (temp_dir / "partials" / "outer.md").write_text(
            "outer[@include(deep/inner.md)]", encoding="utf-8"
        )
        (nested / "inner.md").write_text("inner", encoding="utf-8")

        result = resolve_includes("@include(partials/outer.md)", temp_dir)

        assert result.content == "outer[inner]"
        assert len(result.included) == 2

    def test_absolute_path(self, temp_dir: Path):
        part = temp_dir / "abs.md"
        part.write_text("ABS", encoding="utf-8")
        other = temp_dir / "elsewhere"
        other.mkdir()

        result = resolve_includes(f"@include({part})", other)
        assert result.content == "ABS"

    def test_missing_file_leaves_directive(self, temp_dir: Path):
        result = resolve_includes("x @include(missing.md) y", temp_dir)

        assert result.content == "x @include(missing.md) y"
        assert result.has_errors
        assert len(result.diagnostics) == 1
        assert "Error including missing.md" in result.diagnostics[0].message

    def test_missing_file_does_not_stop_later_includes(self, temp_dir: Path):
        (temp_dir / "ok.md").write_text("OK", encoding="utf-8")

        result = resolve_includes("@include(missing.md)|@include(ok.md)", temp_dir)

        assert result.content == "@include(missing.md)|OK"

    def test_same_file_included_twice(self, temp_dir: Path):
        (temp_dir / "part.md").write_text("P", encoding="utf-8")

        result = resolve_includes("@include(part.md)-@include(part.md)", temp_dir)

        assert result.content == "P-P"
        assert result.diagnostics == []

    def test_included_text_inserted_literally(self, temp_dir: Path):
        (temp_dir / "part.md").write_text(r"$& \1 \g<0>", encoding="utf-8")

        result = resolve_includes("@include(part.md)", temp_dir)
        assert result.content == r"$& \1 \g<0>"

    def test_cycle_between_two_files(self, temp_dir: Path):
        (temp_dir / "a.md").write_text("A(@include(b.md))", encoding="utf-8")
        (temp_dir / "b.md").write_text("B(@include(a.md))", encoding="utf-8")

        result = resolve_includes("@include(a.md)", temp_dir)

        assert result.content == "A(B(@include(a.md)))"
        assert not result.has_errors
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].level == "warning"
        assert "Circular include detected: a.md" in result.diagnostics[0].message

    def test_self_include_from_root_file(self, temp_dir: Path):
        source = temp_dir / "self.src.md"
        source.write_text("me @include(self.src.md)", encoding="utf-8")

        result = resolve_file(source)

        assert result.content == "me @include(self.src.md)"
        assert result.diagnostics[0].level == "warning"

    def test_diagnostic_reports_containing_file(self, temp_dir: Path):
        (temp_dir / "outer.md").write_text("@include(nope.md)", encoding="utf-8")

        result = resolve_includes("@include(outer.md)", temp_dir)

        assert result.diagnostics[0].source == (temp_dir / "outer.md").resolve()
        assert result.diagnostics[0].target == "nope.md"

    def test_directory_target_is_an_error(self, temp_dir: Path):
        (temp_dir / "dir.md").mkdir()

        result = resolve_includes("@include(dir.md)", temp_dir)

        assert result.content == "@include(dir.md)"
        assert result.has_errors

    def test_invalid_utf8_target_is_an_error(self, temp_dir: Path):
        (temp_dir / "bad.md").write_bytes(b"\xff\xfe")

        result = resolve_includes("@include(bad.md)", temp_dir)

        assert result.content == "@include(bad.md)"
        assert result.has_errors
        assert "Error including bad.md" in result.diagnostics[0].message
        assert result.included == []
