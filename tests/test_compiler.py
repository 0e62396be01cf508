"""Tests for routeurl.routing.compiler — pattern to regex compilation."""

import re

import pytest

from routeurl.config import CompileOptions
from routeurl.errors import PatternError
from routeurl.routing.compiler import compile_path, tokenize
from routeurl.routing.route import ParamKey


class TestTokenize:
    def test_static(self) -> None:
        assert tokenize("/users") == ["/users"]

    def test_param(self) -> None:
        tokens = tokenize("/users/:id")
        assert tokens[0] == "/users"
        assert tokens[1].prefix == "/"
        assert tokens[1].key == ParamKey("id")

    def test_brace_param(self) -> None:
        tokens = tokenize("/users/{id:int}")
        assert tokens[1].key.name == "id"
        assert tokens[1].key.converter == "int"
        assert tokens[1].key.pattern == r"\d+"

    def test_escaped_literal(self) -> None:
        assert tokenize("/price/\\:usd") == ["/price/:usd"]

    def test_asterisk_is_positional(self) -> None:
        tokens = tokenize("/static/*")
        assert tokens[1].key is None
        assert tokens[1].pattern == ".*"


class TestCompileBasics:
    def test_named_param(self) -> None:
        compiled = compile_path("/users/:id")
        assert compiled.keys == (ParamKey("id"),)
        assert compiled.names == ("id",)
        assert compiled.regex.pattern == "^/users/([^/]+?)(?:/(?=$))?$"
        m = compiled.regex.match("/users/42")
        assert m is not None
        assert m.group(1) == "42"

    def test_param_does_not_cross_segments(self) -> None:
        assert compile_path("/users/:id").regex.match("/users/42/posts") is None

    def test_root(self) -> None:
        regex = compile_path("/").regex
        assert regex.match("/")
        assert regex.match("")

    def test_literals_are_escaped(self) -> None:
        regex = compile_path("/a+b/c$").regex
        assert regex.match("/a+b/c$")
        assert regex.match("/aab/c") is None

    def test_escaped_colon(self) -> None:
        compiled = compile_path("/price/\\:usd")
        assert compiled.keys == ()
        assert compiled.regex.match("/price/:usd")

    def test_multiple_params(self) -> None:
        compiled = compile_path("/users/:user/posts/:post")
        assert compiled.names == ("user", "post")
        m = compiled.regex.match("/users/alice/posts/7")
        assert m is not None
        assert m.groups() == ("alice", "7")

    def test_dot_prefix(self) -> None:
        compiled = compile_path("/file.:ext")
        m = compiled.regex.match("/file.json")
        assert m is not None
        assert m.group(1) == "json"


class TestCompileModifiers:
    def test_optional(self) -> None:
        compiled = compile_path("/posts/:slug?")
        assert compiled.keys[0].optional is True
        m = compiled.regex.match("/posts")
        assert m is not None
        assert m.group(1) is None
        assert compiled.regex.match("/posts/hello").group(1) == "hello"

    def test_one_or_more(self) -> None:
        compiled = compile_path("/files/:parts+")
        assert compiled.keys[0].repeat is True
        assert compiled.regex.match("/files/a/b/c").group(1) == "a/b/c"
        assert compiled.regex.match("/files") is None

    def test_zero_or_more(self) -> None:
        regex = compile_path("/files/:parts*").regex
        assert regex.match("/files")
        assert regex.match("/files/a/b").group(1) == "a/b"

    def test_custom_regex(self) -> None:
        regex = compile_path("/users/:id(\\d+)").regex
        assert regex.match("/users/42")
        assert regex.match("/users/abc") is None

    def test_custom_regex_with_nested_group(self) -> None:
        compiled = compile_path("/items/:id((a|b)x)")
        assert compiled.names == ("id",)
        assert compiled.regex.groups == 1
        assert compiled.regex.match("/items/ax").group(1) == "ax"
        assert compiled.regex.match("/items/foo(ax)") is None

    def test_custom_regex_with_non_capturing_group(self) -> None:
        compiled = compile_path("/items/:id(\\d+(?:-\\d+)?)")
        assert compiled.regex.match("/items/12-3").group(1) == "12-3"
        assert compiled.regex.match("/items/12").group(1) == "12"

    def test_custom_regex_paren_in_class(self) -> None:
        regex = compile_path("/items/:id([)(]+)").regex
        assert regex.match("/items/)(").group(1) == ")("

    def test_capturing_converter_made_non_capturing(self) -> None:
        options = CompileOptions(converters={"slug": (r"([a-z]+)-(\d+)", str)})
        compiled = compile_path("/posts/{post:slug}", options)
        assert compiled.regex.groups == 1
        assert compiled.regex.match("/posts/abc-12").group(1) == "abc-12"

    def test_positional_group_with_nested_group(self) -> None:
        compiled = compile_path("/v/((a|b)\\d)")
        assert compiled.keys == (None,)
        assert compiled.regex.match("/v/b7").group(1) == "b7"

    def test_int_converter(self) -> None:
        regex = compile_path("/users/{id:int}").regex
        assert regex.match("/users/42")
        assert regex.match("/users/abc") is None

    def test_path_converter(self) -> None:
        regex = compile_path("/docs/{rest:path}").regex
        assert regex.match("/docs/api/v2/intro").group(1) == "api/v2/intro"

    def test_custom_converter(self) -> None:
        options = CompileOptions(converters={"hex": (r"[0-9a-f]+", str)})
        regex = compile_path("/color/{value:hex}", options).regex
        assert regex.match("/color/ff00aa")
        assert regex.match("/color/xyz") is None


class TestCompilePositional:
    def test_group(self) -> None:
        compiled = compile_path("/archive/(\\d{4})")
        assert compiled.keys == (None,)
        assert compiled.names == ()
        assert compiled.regex.match("/archive/2024").group(1) == "2024"

    def test_asterisk(self) -> None:
        compiled = compile_path("/static/*")
        assert compiled.keys == (None,)
        assert compiled.regex.match("/static/css/app.css").group(1) == "css/app.css"

    def test_keys_aligned_with_groups(self) -> None:
        compiled = compile_path("/:section/(\\d+)/:slug")
        assert [k.name if k else None for k in compiled.keys] == ["section", None, "slug"]
        assert compiled.regex.groups == len(compiled.keys)


class TestCompileOptions:
    def test_case_insensitive_by_default(self) -> None:
        assert compile_path("/Users").regex.match("/users")

    def test_sensitive(self) -> None:
        regex = compile_path("/Users", CompileOptions(sensitive=True)).regex
        assert regex.match("/Users")
        assert regex.match("/users") is None

    def test_lenient_trailing_slash(self) -> None:
        regex = compile_path("/users/").regex
        assert regex.match("/users")
        assert regex.match("/users/")

    def test_strict_trailing_slash(self) -> None:
        regex = compile_path("/users/", CompileOptions(strict=True)).regex
        assert regex.match("/users/")
        assert regex.match("/users") is None

    def test_prefix_match(self) -> None:
        regex = compile_path("/api", CompileOptions(end=False)).regex
        assert regex.match("/api/users")
        assert regex.match("/api")
        assert regex.match("/apix") is None

    def test_mapping_options(self) -> None:
        regex = compile_path("/Users", {"sensitive": True}).regex
        assert regex.match("/users") is None

    def test_unknown_options_ignored(self) -> None:
        regex = compile_path("/users/", {"strict": True, "bogus": 1}).regex
        assert regex.match("/users") is None


class TestCompileRegex:
    def test_precompiled_pattern(self) -> None:
        source = re.compile(r"^/(?P<year>\d{4})/(\d{2})$")
        compiled = compile_path(source)
        assert compiled.regex is source
        assert compiled.keys == (ParamKey("year", pattern=""), None)


class TestCompileErrors:
    def test_unknown_converter(self) -> None:
        with pytest.raises(PatternError, match="uuid"):
            compile_path("/items/{id:uuid}")

    def test_empty_brace(self) -> None:
        with pytest.raises(PatternError, match="Empty parameter name"):
            compile_path("/items/{}")

    def test_invalid_group_regex(self) -> None:
        with pytest.raises(PatternError, match="Invalid pattern"):
            compile_path("/(*)")

    def test_named_group_in_converter_rejected(self) -> None:
        options = CompileOptions(converters={"slug": (r"(?P<word>[a-z]+)-\d+", str)})
        with pytest.raises(PatternError, match="named groups"):
            compile_path("/posts/{post:slug}", options)

    def test_unbalanced_open_group(self) -> None:
        with pytest.raises(PatternError, match="Unbalanced group"):
            compile_path("/a(b")

    def test_unbalanced_custom_regex(self) -> None:
        with pytest.raises(PatternError, match="Unbalanced group"):
            compile_path("/items/:id(\\d+")

    def test_stray_close_paren(self) -> None:
        with pytest.raises(PatternError, match=r"Unbalanced '\)'"):
            compile_path("/a)b")

    def test_escaped_parens_are_literal(self) -> None:
        compiled = compile_path("/a\\(b\\)")
        assert compiled.keys == ()
        assert compiled.regex.match("/a(b)")

    def test_empty_group(self) -> None:
        with pytest.raises(PatternError, match="Empty group"):
            compile_path("/items/:id()")

    def test_pattern_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            compile_path("/items/{id:nope}")
