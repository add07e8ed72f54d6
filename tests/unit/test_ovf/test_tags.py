# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for line-level tag sniffing."""
from __future__ import annotations

import pytest

from ovf2vmware.ovf.tags import (
    depth_delta,
    first_tag,
    iter_tags,
    leading_name,
    pending_after,
    start_tag,
    visible_text,
)


@pytest.mark.unit
class TestFirstTag:
    def test_prefixed_start_tag(self):
        tag = first_tag("        <rasd:Caption>sound</rasd:Caption>")

        assert tag is not None
        assert tag.qname == "rasd:Caption"
        assert tag.prefix == "rasd"
        assert tag.local == "Caption"
        assert tag.opening
        assert tag.text == "<rasd:Caption>"

    def test_start_tag_with_attributes(self):
        tag = first_tag('    <VirtualSystem ovf:id="centos7">')

        assert tag.local == "VirtualSystem"
        assert tag.prefix == ""
        assert tag.text == '<VirtualSystem ovf:id="centos7">'

    def test_self_closing(self):
        tag = first_tag('<File ovf:id="file1" ovf:href="centos7-disk001.vmdk"/>')

        assert tag.self_closing
        assert not tag.opening
        assert not tag.closing

    def test_end_tag(self):
        assert start_tag("      </Item>") is None
        tag = first_tag("      </Item>")
        assert tag is not None and tag.closing and tag.local == "Item"

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "   ",
            "plain text",
            "<!-- <Item> -->",
            '<?xml version="1.0"?>',
            "<![CDATA[<Item>]]>",
            "</Item/>",
        ],
    )
    def test_lines_without_a_leading_tag(self, line):
        assert first_tag(line) is None


@pytest.mark.unit
class TestDepthDelta:
    def test_open_and_close_on_one_line(self):
        assert depth_delta("<Item><rasd:Caption>x</rasd:Caption></Item>", "Item") == 0

    def test_nested_opens(self):
        assert depth_delta("<Item><Item>", "Item") == 2
        assert depth_delta("</Item>", "Item") == -1

    def test_matches_local_name_only(self):
        assert depth_delta("<ovf:Item>", "Item") == 1
        assert depth_delta('<ExtraDataItem name="x"/>', "Item") == 0
        assert depth_delta("<Items>", "Item") == 0

    def test_self_closing_does_not_nest(self):
        assert depth_delta("<Item/>", "Item") == 0

    def test_comments_are_ignored(self):
        assert depth_delta("<!-- <Item> --> <Item>", "Item") == 1

    def test_iter_tags_in_order(self):
        names = [(t.qname, t.closing) for t in iter_tags("<a><b:c/>text</a>")]
        assert names == [("a", False), ("b:c", False), ("a", True)]

    def test_unclosed_comment_hides_the_rest_of_the_line(self):
        assert depth_delta("<Item> <!-- <Item>", "Item") == 1


@pytest.mark.unit
class TestVisibleText:
    def test_single_line_constructs(self):
        assert visible_text('<a><!-- x --><?pi y?><![CDATA[<b>]]></a>') == ("<a></a>", "")

    def test_comment_left_open(self):
        assert visible_text("  <a/> <!-- start") == ("  <a/> ", "-->")

    def test_pending_comment_is_closed_later(self):
        assert visible_text("  <Item>", "-->") == ("", "-->")
        assert visible_text("  --> <b/>", "-->") == (" <b/>", "")

    def test_cdata_left_open(self):
        assert visible_text("<x><![CDATA[") == ("<x>", "]]>")

    def test_pending_after_lines(self):
        assert pending_after(["<!--", "<Item>"]) == "-->"
        assert pending_after(["<!--", "-->", "<Item>"]) == ""


@pytest.mark.unit
class TestStartTagDetails:
    def test_namespace_declarations(self):
        tag = first_tag("<Item xmlns:r='urn:r' xmlns=\"urn:d\" id=\"1\">")
        assert tag.namespace_decls == {"r": "urn:r", "": "urn:d"}

    def test_no_declarations(self):
        assert first_tag('<Item id="1">').namespace_decls == {}

    def test_leading_name_of_incomplete_start_tag(self):
        assert first_tag("  <rasd:Item") is None
        assert leading_name("  <rasd:Item") == "rasd:Item"
        assert leading_name("  </Item>") is None
        assert leading_name("text") is None
