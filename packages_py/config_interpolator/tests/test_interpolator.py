import pytest
from config_interpolator import (
    Interpolator,
    MissingStrategy,
    CircularReferenceError,
    MissingPropertyError,
    extract_placeholders,
    resolve,
)
from config_interpolator.parser import find_placeholder_end, split_default


def lookup_from(data):
    return data.get


class TestResolve:
    def test_no_placeholders(self):
        assert Interpolator().resolve("plain text", lookup_from({})) == "plain text"

    def test_simple_substitution(self):
        data = {"host": "localhost", "port": "8080"}
        result = Interpolator().resolve("http://${host}:${port}/api", lookup_from(data))
        assert result == "http://localhost:8080/api"

    def test_recursive_value(self):
        data = {"a": "${b}", "b": "x"}
        assert Interpolator().resolve("${a}", lookup_from(data)) == "x"

    def test_non_string_values(self):
        data = {"count": 3, "enabled": True, "items": [1, 2]}
        interpolator = Interpolator()
        assert interpolator.resolve("${count}", lookup_from(data)) == "3"
        assert interpolator.resolve("${enabled}", lookup_from(data)) == "true"
        assert interpolator.resolve("${items}", lookup_from(data)) == "[1, 2]"

    def test_repeated_key_is_not_a_cycle(self):
        data = {"a": "x"}
        assert Interpolator().resolve("${a}-${a}", lookup_from(data)) == "x-x"

    def test_empty_template(self):
        assert Interpolator().resolve("", lookup_from({})) == ""
        assert Interpolator().resolve(None, lookup_from({})) == ""


class TestDefaults:
    def test_default_used_when_missing(self):
        assert Interpolator().resolve("${foo:default}", lookup_from({})) == "default"

    def test_numeric_default_keeps_sign(self):
        assert Interpolator().resolve("${foo:-123}", lookup_from({})) == "-123"

    def test_default_ignored_when_present(self):
        assert Interpolator().resolve("${foo:default}", lookup_from({"foo": "set"})) == "set"

    def test_nested_default(self):
        data = {"a": "A"}
        assert Interpolator().resolve("${b:${c:${a}}}", lookup_from(data)) == "A"

    def test_empty_default(self):
        assert Interpolator().resolve("[${foo:}]", lookup_from({})) == "[]"

    def test_placeholder_in_name(self):
        data = {"env": "prod", "db.prod": "prod-db"}
        assert Interpolator().resolve("${db.${env}}", lookup_from(data)) == "prod-db"


class TestCycles:
    def test_self_reference(self):
        with pytest.raises(CircularReferenceError) as exc:
            Interpolator().resolve("${a}", lookup_from({"a": "${a}"}))
        assert exc.value.cycle == ["a", "a"]

    def test_two_step_cycle(self):
        data = {"a": "${b}", "b": "${a}"}
        with pytest.raises(CircularReferenceError) as exc:
            Interpolator().resolve("${a}", lookup_from(data))
        assert exc.value.cycle == ["a", "b", "a"]
        assert "a -> b -> a" in str(exc.value)

    def test_cycle_through_defaults(self):
        with pytest.raises(CircularReferenceError):
            Interpolator().resolve("${b:${c:${b}}}", lookup_from({}))


class TestMissing:
    def test_error_strategy(self):
        with pytest.raises(MissingPropertyError) as exc:
            Interpolator().resolve("x=${nope}", lookup_from({}))
        assert exc.value.key == "nope"

    def test_keep_strategy(self):
        interpolator = Interpolator(missing=MissingStrategy.KEEP)
        assert interpolator.resolve("x=${nope}", lookup_from({})) == "x=${nope}"

    def test_empty_strategy(self):
        interpolator = Interpolator(missing=MissingStrategy.EMPTY)
        assert interpolator.resolve("x=${nope}", lookup_from({})) == "x="

    def test_with_missing_copies_tokens(self):
        base = Interpolator(prefix="%{", suffix="}")
        keep = base.with_missing(MissingStrategy.KEEP)
        assert keep.prefix == "%{"
        assert keep.resolve("%{nope}", lookup_from({})) == "%{nope}"


class TestSyntax:
    def test_escaped_marker(self):
        assert Interpolator().resolve("$${literal}", lookup_from({})) == "${literal}"

    def test_unterminated_marker_kept(self):
        assert Interpolator().resolve("abc ${oops", lookup_from({})) == "abc ${oops"

    def test_custom_tokens(self):
        interpolator = Interpolator(prefix="{{", suffix="}}", default_separator="|")
        assert interpolator.resolve("{{name|anon}}", lookup_from({})) == "anon"

    def test_bind(self):
        resolver = Interpolator().bind(lookup_from({"a": "1"}))
        assert resolver("${a}${a}") == "11"

    def test_module_level_resolve(self):
        assert resolve("${a}", {"a": "b"}) == "b"

    def test_rejects_empty_tokens(self):
        with pytest.raises(ValueError):
            Interpolator(prefix="")


class TestParser:
    def test_find_end_balances_nesting(self):
        text = "${a:${b}}!"
        assert find_placeholder_end(text, 0, "${", "}") == 8

    def test_find_end_unterminated(self):
        assert find_placeholder_end("${a", 0, "${", "}") == -1

    def test_split_default_top_level_only(self):
        assert split_default("b:${c:${a}}", "${", "}", ":") == ("b", "${c:${a}}")
        assert split_default("${x:y}", "${", "}", ":") == ("${x:y}", None)


class TestExtractor:
    def test_extract(self):
        placeholders = extract_placeholders("Hello ${name:world}, $${skip} ${n}")
        assert [p["name"] for p in placeholders] == ["name", "n"]
        assert placeholders[0]["default"] == "world"
        assert placeholders[0]["raw"] == "${name:world}"

    def test_extract_empty(self):
        assert extract_placeholders("") == []
