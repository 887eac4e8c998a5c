import unittest

from softhtml.attributes import ClassAttribute, SimpleAttribute, StyleAttribute, create_attribute


class TestCreateAttribute(unittest.TestCase):
    def test_kind_follows_name(self) -> None:
        assert isinstance(create_attribute("class", "a b"), ClassAttribute)
        assert isinstance(create_attribute("style", "color: red"), StyleAttribute)
        assert isinstance(create_attribute("id", "main"), SimpleAttribute)

    def test_missing_value(self) -> None:
        assert create_attribute("hidden").value == ""
        assert create_attribute("class").value == ""
        assert create_attribute("style").value == ""


class TestSimpleAttribute(unittest.TestCase):
    def test_value_is_trimmed(self) -> None:
        attribute = SimpleAttribute("id", "  main ")
        assert attribute.value == "main"
        assert attribute.real_value == "main"

    def test_non_string_value(self) -> None:
        assert SimpleAttribute("width", 42).value == "42"

    def test_render(self) -> None:
        assert SimpleAttribute("hidden").render() == "hidden"
        assert SimpleAttribute("title", 'say "hi" & go').render() == 'title="say &quot;hi&quot; &amp; go"'

    def test_set_value(self) -> None:
        attribute = SimpleAttribute("id", "a")
        attribute.set_value(" b ")
        assert attribute.value == "b"

    def test_to_json(self) -> None:
        assert SimpleAttribute("id", "x").to_json() == {"type": "attribute", "name": "id", "value": "x"}

    def test_equality(self) -> None:
        assert SimpleAttribute("id", "x") == SimpleAttribute("id", "x")
        assert SimpleAttribute("id", "x") != SimpleAttribute("name", "x")


class TestClassAttribute(unittest.TestCase):
    def test_split_on_whitespace(self) -> None:
        attribute = ClassAttribute("  big\tred  big ")
        assert attribute.real_value == ["big", "red", "big"]
        assert attribute.value == "big red big"

    def test_from_iterable(self) -> None:
        classes = ["a", "b"]
        attribute = ClassAttribute(classes)
        attribute.add("c")
        assert attribute.value == "a b c"
        assert classes == ["a", "b"]

    def test_contains(self) -> None:
        attribute = ClassAttribute("a b")
        assert attribute.contains("a")
        assert not attribute.contains("c")

    def test_remove_first_occurrence(self) -> None:
        attribute = ClassAttribute("a b a")
        assert attribute.remove("a")
        assert attribute.value == "b a"
        assert not attribute.remove("z")

    def test_render(self) -> None:
        assert ClassAttribute("a b").render() == 'class="a b"'
        assert ClassAttribute("").render() == "class"

    def test_clone_is_independent(self) -> None:
        attribute = ClassAttribute("a")
        clone = attribute.clone()
        clone.add("b")
        assert attribute.value == "a"
        assert clone == ClassAttribute("a b")

    def test_to_json(self) -> None:
        assert ClassAttribute("a b").to_json() == {
            "type": "class_attribute",
            "name": "class",
            "value": "a b",
            "classes": ["a", "b"],
        }


class TestStyleAttribute(unittest.TestCase):
    def test_parse_declarations(self) -> None:
        attribute = StyleAttribute("color:red;  margin : 0 auto ;")
        assert attribute.real_value == {"color": "red", "margin": "0 auto"}
        assert attribute.value == "color: red; margin: 0 auto;"

    def test_comments_and_malformed_segments(self) -> None:
        attribute = StyleAttribute("/* theme */ color: red; bogus; : nothing; width: 1px")
        assert attribute.real_value == {"color": "red", "width": "1px"}

    def test_values_may_contain_colons(self) -> None:
        attribute = StyleAttribute("background: url(http://example.com/a.png)")
        assert attribute.get("background") == "url(http://example.com/a.png)"

    def test_from_mapping(self) -> None:
        attribute = StyleAttribute({"color": " red ", "width": 10})
        assert attribute.value == "color: red; width: 10;"

    def test_set_get_remove(self) -> None:
        attribute = StyleAttribute()
        attribute.set("color", "blue")
        attribute.set("color", "red")
        attribute.set("margin", 0)
        assert attribute.get("color") == "red"
        assert attribute.value == "color: red; margin: 0;"
        assert attribute.remove("color")
        assert not attribute.remove("color")
        assert attribute.get("color") is None

    def test_empty_style(self) -> None:
        attribute = StyleAttribute("")
        assert attribute.value == ""
        assert attribute.render() == "style"

    def test_clone_is_independent(self) -> None:
        attribute = StyleAttribute("color: red")
        clone = attribute.clone()
        clone.set("color", "blue")
        assert attribute.get("color") == "red"


if __name__ == "__main__":
    unittest.main()
