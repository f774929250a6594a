"""
Tests for the contact page rendering helpers.
"""

from __future__ import annotations

import pytest

from src.api.deps import require_param
from src.api.routes.contacts_ssr import (
    _escape_html,
    render_contact_form,
    render_contact_nav,
    render_favorite,
    render_index,
    render_name,
    render_shell,
)
from src.components.contacts import ContactListOutput
from src.domain.entities import Contact


def listing(*contacts: Contact) -> ContactListOutput:
    return ContactListOutput(contacts=tuple(contacts), total=len(contacts))


class TestEscapeHtml:
    def test_escapes_special_characters(self) -> None:
        assert _escape_html("<a href=\"x\">'&'</a>") == (
            "&lt;a href=&quot;x&quot;&gt;&#x27;&amp;&#x27;&lt;/a&gt;"
        )

    def test_none_is_empty(self) -> None:
        assert _escape_html(None) == ""


class TestRenderName:
    def test_full_name(self) -> None:
        assert render_name(Contact(first="Sarah", last="Doe")) == "Sarah Doe"

    def test_no_name(self) -> None:
        assert render_name(Contact()) == "<i>No Name</i>"

    def test_name_is_escaped(self) -> None:
        assert render_name(Contact(first="<b>")) == "&lt;b&gt;"


class TestContactNav:
    def test_empty(self) -> None:
        assert "<p><i>No contacts</i></p>" in render_contact_nav(listing())

    def test_entries_and_active(self) -> None:
        html = render_contact_nav(
            listing(Contact(id="1", first="Sarah"), Contact(id="2", favorite=True)),
            active_id="2",
        )

        assert '<li><a href="/contacts/1">Sarah</a></li>' in html
        assert '<a href="/contacts/2" class="active"><i>No Name</i> <span>★</span></a>' in html

    def test_ids_are_url_quoted(self) -> None:
        html = render_contact_nav(listing(Contact(id="a/b")))

        assert 'href="/contacts/a%2Fb"' in html


class TestFavorite:
    def test_not_favorite(self) -> None:
        html = render_favorite(Contact(id="1"))

        assert 'aria-label="Add to favorites"' in html
        assert 'value="true">☆<' in html
        assert 'action="/contacts/1"' in html

    def test_favorite(self) -> None:
        html = render_favorite(Contact(id="1", favorite=True), q="doe")

        assert 'aria-label="Remove from favorites"' in html
        assert 'value="false">★<' in html
        assert 'action="/contacts/1?q=doe"' in html


class TestPages:
    def test_edit_form_uses_record_field_names(self) -> None:
        html = render_contact_form(Contact(id="1"))

        for name in ("first", "last", "twitter", "avatar", "notes"):
            assert f'name="{name}"' in html
        assert 'name="Last"' not in html

    def test_index(self) -> None:
        assert 'href="https://example.com/docs"' in render_index("https://example.com/docs")

    def test_shell_layout(self) -> None:
        html = render_shell("Contacts", listing(), None, "<p>outlet</p>")

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Contacts</title>" in html
        assert 'id="sidebar"' in html
        assert '<div id="detail">' in html
        assert "<p>outlet</p>" in html
        assert 'id="search-spinner" aria-hidden="true" hidden' in html


class TestRequireParam:
    def test_present(self) -> None:
        assert require_param("abc") == "abc"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value: str | None) -> None:
        with pytest.raises(ValueError, match="Missing contactId param"):
            require_param(value)
