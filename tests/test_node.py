import json
import unittest

from softhtml import (
    TAGS,
    Comment,
    Element,
    ImageElement,
    InvalidOperation,
    InvalidTag,
    LinkElement,
    Text,
    create_element,
)
from softhtml.attributes import ClassAttribute, StyleAttribute
from softhtml.serialize import COMPACT


def build_tree():
    # <div id="root"><section><p id="deep">x</p></section><p id="shallow">y</p></div>
    deep = Element("p").with_attribute("id", "deep").with_child("x")
    shallow = Element("p").with_attribute("id", "shallow").with_child("y")
    section = Element("section").with_child(deep)
    return Element("div").with_attribute("id", "root").with_child(section).with_child(shallow)


class TestConstruction(unittest.TestCase):
    def test_element_from_registry(self) -> None:
        element = Element("DIV")
        assert element.tag is TAGS["div"]
        assert element.name == "div"
        assert element.attributes == []
        assert element.children == []

    def test_element_rejects_unknown_tag(self) -> None:
        with self.assertRaises(InvalidTag):
            Element("my-widget")
        with self.assertRaises(InvalidTag):
            Element(None)

    def test_create_element_is_lenient(self) -> None:
        element = create_element("my-widget")
        assert element.tag.name == "my-widget"
        assert element.tag.inline

    def test_create_element_specialized_classes(self) -> None:
        assert isinstance(create_element("A"), LinkElement)
        assert isinstance(create_element(TAGS["img"]), ImageElement)
        assert type(create_element("div")) is Element

    def test_create_element_rejects_non_tags(self) -> None:
        with self.assertRaises(InvalidTag):
            create_element(42)


class TestChildren(unittest.TestCase):
    def test_append_string_wraps_text(self) -> None:
        element = Element("p")
        node = element.append_child("hello")
        assert isinstance(node, Text)
        assert element.children == [Text("hello")]

    def test_append_to_self_closing_fails(self) -> None:
        with self.assertRaises(InvalidOperation):
            Element("br").append_child("x")
        with self.assertRaises(InvalidOperation):
            Element("img").append_child(Element("span"))

    def test_append_invalid_node_fails(self) -> None:
        with self.assertRaises(InvalidOperation):
            Element("div").append_child(42)

    def test_with_child_and_apply(self) -> None:
        seen = []
        element = Element("ul").with_child(Element("li")).apply(seen.append)
        assert seen == [element]
        assert len(element.children) == 1


class TestAttributes(unittest.TestCase):
    def test_getter_creates_missing_attribute(self) -> None:
        element = Element("div")
        attribute = element.attribute("id")
        assert attribute.value == ""
        assert element.attributes == [attribute]
        assert element.attribute("id") is attribute

    def test_get_attribute_has_no_side_effects(self) -> None:
        element = Element("div")
        assert element.get_attribute("id") is None
        assert element.attributes == []

    def test_set_replaces_in_place(self) -> None:
        element = Element("div").with_attribute("id", "a").with_attribute("title", "t")
        element.attribute("id", "b")
        assert [attribute.name for attribute in element.attributes] == ["id", "title"]
        assert element.attribute("id").value == "b"

    def test_typed_attributes(self) -> None:
        element = Element("div").with_attribute("class", "a b").with_attribute("style", "color: red")
        assert isinstance(element.attribute("class"), ClassAttribute)
        assert isinstance(element.attribute("style"), StyleAttribute)

    def test_class_list_mutation(self) -> None:
        element = Element("div")
        element.attribute("class").add("active")
        assert element.render(COMPACT) == '<div class="active"></div>'

    def test_remove_attribute(self) -> None:
        element = Element("div").with_attribute("id", "a")
        element.remove_attribute("id")
        element.remove_attribute("missing")
        assert element.attributes == []

    def test_style_shortcut(self) -> None:
        element = Element("p")
        assert element.style("color") is None
        assert element.attributes == []
        assert element.style("color", "red") is element
        assert element.style("color") == "red"
        assert element.render(COMPACT) == '<p style="color: red;"></p>'

    def test_link_properties(self) -> None:
        link = create_element("a")
        link.href = "https://example.com/?a=1&b=2"
        link.title = "Example"
        assert link.href == "https://example.com/?a=1&b=2"
        assert link.render(COMPACT) == '<a href="https://example.com/?a=1&amp;b=2" title="Example"></a>'

    def test_image_properties(self) -> None:
        image = create_element("img")
        image.src = "fox.png"
        image.alt = "A fox"
        assert image.render(COMPACT) == '<img src="fox.png" alt="A fox" />'


class TestWhitespace(unittest.TestCase):
    def test_purge_blank_children(self) -> None:
        element = (
            Element("div")
            .with_child("\n\t")
            .with_child(Element("a").with_child("x"))
            .with_child(" ")
            .with_child(Element("b").with_child("  "))
            .with_child(Comment("\n"))
        )
        element.purge_blank_children()
        assert len(element.children) == 3
        assert element.children[1] == Text(" ")
        assert element.children[2].children == []

    def test_purge_skips_preserved_subtrees(self) -> None:
        pre = Element("pre").with_child("\n  ")
        Element("div").with_child(pre).purge_blank_children()
        assert pre.children == [Text("\n  ")]

    def test_simplify_whitespaces(self) -> None:
        span = Element("span").with_child("  a   b  ")
        element = Element("div").with_child("\n\t\t").with_child("\n\t\tHello\n\t\tworld  ").with_child(span)
        element.simplify_whitespaces()
        assert element.children[0] == Text("\nHello\nworld ")
        assert span.children == [Text(" a   b ")]


class TestSearch(unittest.TestCase):
    def test_find_first_is_shallow(self) -> None:
        tree = build_tree()
        found = tree.find_first(lambda element: element.name == "p")
        assert found.attribute("id").value == "shallow"

    def test_find_deep_is_pre_order(self) -> None:
        tree = build_tree()
        found = tree.find_deep(lambda element: element.name == "p")
        assert found.attribute("id").value == "deep"

    def test_find_deep_skips_root(self) -> None:
        tree = build_tree()
        assert tree.find_deep(lambda element: element.name == "div") is None

    def test_by_tag_name(self) -> None:
        tree = build_tree()
        assert tree.get_by_tag_name("P").attribute("id").value == "shallow"
        assert tree.find_by_tag_name(TAGS["p"]).attribute("id").value == "deep"
        assert tree.get_by_tag_name("span") is None

    def test_find_by_id(self) -> None:
        tree = build_tree()
        assert tree.find_by_id("shallow").to_text() == "y"
        assert tree.find_by_id("missing") is None
        # Lookups never add id attributes.
        assert tree.children[0].get_attribute("id") is None


class TestExport(unittest.TestCase):
    def test_to_text_skips_comments(self) -> None:
        element = Element("p").with_child("a").with_child(Comment("note")).with_child(Element("b").with_child("c"))
        assert element.to_text() == "ac"

    def test_to_json(self) -> None:
        element = Element("p").with_attribute("id", "x").with_child("hi").with_child(Comment("c"))
        assert element.to_json() == {
            "type": "tag",
            "tag": "p",
            "attributes": [{"type": "attribute", "name": "id", "value": "x"}],
            "children": ["hi", {"type": "comment", "content": "c"}],
        }

    def test_to_json_is_serializable(self) -> None:
        element = Element("div").with_attribute("class", "a b").with_attribute("style", "color: red")
        element.append_child(Element("p").with_child("x"))
        data = json.loads(json.dumps(element.to_json()))
        assert data["attributes"][0]["classes"] == ["a", "b"]
        assert data["attributes"][1]["style"] == {"color": "red"}
        assert data["children"][0]["children"] == ["x"]

    def test_clone_is_deep(self) -> None:
        tree = build_tree().with_attribute("class", "a")
        clone = tree.clone()
        assert clone.render(COMPACT) == tree.render(COMPACT)

        clone.attribute("class").add("b")
        clone.children[0].children[0].children[0].data = "changed"
        assert tree.attribute("class").value == "a"
        assert tree.find_by_id("deep").to_text() == "x"

    def test_clone_keeps_element_class(self) -> None:
        link = create_element("a")
        link.href = "x"
        clone = link.clone()
        assert isinstance(clone, LinkElement)
        assert clone.href == "x"

    def test_clone_children_and_attributes(self) -> None:
        element = Element("p").with_attribute("id", "x").with_child("t")
        children = element.clone_children()
        attributes = element.clone_attributes()
        assert children == element.children
        assert children[0] is not element.children[0]
        assert attributes == element.attributes
        assert attributes[0] is not element.attributes[0]

    def test_text_and_comment_nodes(self) -> None:
        assert Text("a < b").render() == "a &lt; b"
        assert Text("a < b").render(escape=False) == "a < b"
        assert Comment("note").render() == "<!--note-->"
        assert Comment("note").to_text() == ""
        assert Text("x").clone() == Text("x")


if __name__ == "__main__":
    unittest.main()
