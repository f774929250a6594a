"""
Contacts SSR Routes - Server-side rendered contact pages.

Every page is the root shell (sidebar with search, "New" button and the
contact list) wrapped around a detail outlet. Loaders are GET handlers,
actions are POST handlers that finish with a 303 redirect so the browser
re-fetches both the list and whatever record is on screen.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from src.api.deps import get_app_config, get_contact_service, require_param
from src.app_shell.config import AppConfig
from src.components.contacts import (
    ContactListOutput,
    ContactService,
    CreateContactInput,
    DeleteContactInput,
    GetContactInput,
    SearchContactsInput,
    SetFavoriteInput,
    UpdateContactInput,
    run_create,
    run_delete,
    run_get,
    run_search,
    run_set_favorite,
    run_update,
)
from src.domain.entities import EDITABLE_FIELDS, Contact

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Not found"
DELETE_CONFIRM_MESSAGE = "Please confirm you want to delete this record."


# --- HTML Rendering ---


def _escape_html(text: str | None) -> str:
    """Escape HTML special characters."""
    if text is None:
        return ""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def _with_query(path: str, q: str | None) -> str:
    if q is None:
        return path
    return f"{path}?{urlencode({'q': q})}"


def _contact_path(contact_id: str, suffix: str = "") -> str:
    return f"/contacts/{quote(contact_id, safe='')}{suffix}"


def render_name(contact: Contact) -> str:
    """'First Last', or an italic 'No Name' placeholder."""
    name = contact.display_name
    if name is None:
        return "<i>No Name</i>"
    return _escape_html(name)


def render_contact_nav(listing: ContactListOutput, active_id: str | None = None) -> str:
    """Render the sidebar's contact list, or the empty-state message."""
    if not listing.contacts:
        return '<nav id="contact-nav">\n<p><i>No contacts</i></p>\n</nav>'

    items: list[str] = []
    for contact in listing.contacts:
        css_class = ' class="active"' if contact.id == active_id else ""
        star = " <span>★</span>" if contact.favorite else ""
        items.append(
            f'<li><a href="{_contact_path(contact.id)}"{css_class}>'
            f"{render_name(contact)}{star}</a></li>"
        )
    return '<nav id="contact-nav">\n<ul>\n' + "\n".join(items) + "\n</ul>\n</nav>"


def render_sidebar(
    title: str,
    listing: ContactListOutput,
    q: str | None,
    active_id: str | None = None,
) -> str:
    """Render search form, "New" button and contact list."""
    has_query = "true" if q is not None else "false"
    return f"""<div id="sidebar">
    <h1>{_escape_html(title)}</h1>
    <div>
        <form id="search-form" role="search" action="/" method="get" data-has-query="{has_query}">
            <input id="q" aria-label="Search contacts" placeholder="Search"
                type="search" name="q" value="{_escape_html(q or "")}" />
            <div id="search-spinner" aria-hidden="true" hidden></div>
        </form>
        <form method="post" action="/">
            <button type="submit">New</button>
        </form>
    </div>
    {render_contact_nav(listing, active_id)}
</div>"""


def render_index(docs_url: str) -> str:
    return f"""<p id="index-page">
    This is a demo contacts app.
    <br />
    Check out <a href="{_escape_html(docs_url)}">the docs</a>.
</p>"""


def render_favorite(contact: Contact, q: str | None = None) -> str:
    """Favorite toggle: submits the negation of the current state."""
    favorite = contact.favorite
    label = "Remove from favorites" if favorite else "Add to favorites"
    return f"""<form class="favorite-form" method="post" action="{_escape_html(_with_query(_contact_path(contact.id), q))}">
        <button aria-label="{label}" name="favorite" value="{"false" if favorite else "true"}">{"★" if favorite else "☆"}</button>
    </form>"""


def render_contact_detail(contact: Contact, q: str | None = None) -> str:
    """Render one contact with favorite toggle and edit/delete entry points."""
    alt = f"{contact.first or ''} {contact.last or ''} avatar"
    twitter = ""
    if contact.twitter:
        handle = _escape_html(contact.twitter)
        twitter = (
            f'<p><a href="https://twitter.com/{handle}">'
            f"{handle}</a></p>"
        )
    notes = f"<p>{_escape_html(contact.notes)}</p>" if contact.notes else ""

    return f"""<div id="contact">
    <div>
        <img alt="{_escape_html(alt)}" src="{_escape_html(contact.avatar)}" />
    </div>
    <div>
        <h1>{render_name(contact)} {render_favorite(contact, q)}</h1>
        {twitter}
        {notes}
        <div>
            <form action="{_contact_path(contact.id, "/edit")}" method="get">
                <button type="submit">Edit</button>
            </form>
            <form action="{_contact_path(contact.id, "/destroy")}" method="post"
                onsubmit="return confirm('{DELETE_CONFIRM_MESSAGE}');">
                <button type="submit">Delete</button>
            </form>
        </div>
    </div>
</div>"""


def render_contact_form(contact: Contact) -> str:
    """Render the pre-filled edit form."""
    return f"""<form id="contact-form" method="post" action="{_contact_path(contact.id, "/edit")}">
    <p>
        <span>Name</span>
        <input aria-label="First name" name="first" type="text"
            placeholder="First" value="{_escape_html(contact.first)}" />
        <input aria-label="Last name" name="last" type="text"
            placeholder="Last" value="{_escape_html(contact.last)}" />
    </p>
    <label>
        <span>Twitter</span>
        <input name="twitter" type="text" placeholder="@jack"
            value="{_escape_html(contact.twitter)}" />
    </label>
    <label>
        <span>Avatar URL</span>
        <input name="avatar" type="text" placeholder="https://example.com/avatar.jpg"
            value="{_escape_html(contact.avatar)}" />
    </label>
    <label>
        <span>Notes</span>
        <textarea name="notes" rows="6">{_escape_html(contact.notes)}</textarea>
    </label>
    <p>
        <button type="submit">Save</button>
        <button type="button" onclick="history.back()">Cancel</button>
    </p>
</form>"""


# Search-as-you-type, optimistic favorite toggle and pending states.
CLIENT_SCRIPT = """
(function () {
  var form = document.getElementById("search-form");
  var input = document.getElementById("q");
  var spinner = document.getElementById("search-spinner");
  var detail = document.getElementById("detail");
  var pending = null;

  function swap(doc, id) {
    var fresh = doc.getElementById(id);
    var current = document.getElementById(id);
    if (fresh && current) { current.replaceWith(fresh); }
  }

  if (form && input) {
    input.addEventListener("input", function () {
      var url = "/?q=" + encodeURIComponent(input.value);
      var isFirstSearch = form.dataset.hasQuery !== "true";
      if (pending) { pending.abort(); }
      pending = new AbortController();
      input.classList.add("loading");
      spinner.hidden = false;
      fetch(url, { signal: pending.signal, headers: { "Accept": "text/html" } })
        .then(function (r) { return r.text(); })
        .then(function (html) {
          var doc = new DOMParser().parseFromString(html, "text/html");
          swap(doc, "contact-nav");
          swap(doc, "detail");
          history[isFirstSearch ? "pushState" : "replaceState"](null, "", url);
          form.dataset.hasQuery = "true";
          input.classList.remove("loading");
          spinner.hidden = true;
        })
        .catch(function (err) {
          if (err.name !== "AbortError") { window.location.assign(url); }
        });
    });
    window.addEventListener("popstate", function () { window.location.reload(); });
  }

  document.addEventListener("click", function (event) {
    var link = event.target.closest && event.target.closest("#contact-nav a");
    if (link && detail) { detail.classList.add("loading"); }
  });

  function showFavorite(button, favorite) {
    button.textContent = favorite ? "\\u2605" : "\\u2606";
    button.value = favorite ? "false" : "true";
    button.setAttribute("aria-label", favorite ? "Remove from favorites" : "Add to favorites");
  }

  document.addEventListener("submit", function (event) {
    var fav = event.target;
    if (!fav.classList || !fav.classList.contains("favorite-form")) { return; }
    event.preventDefault();
    var button = fav.querySelector("button[name=favorite]");
    var next = button.value === "true";
    showFavorite(button, next);
    fetch(fav.action, {
      method: "POST",
      headers: { "Accept": "application/json" },
      body: new URLSearchParams({ favorite: next ? "true" : "false" })
    })
      .then(function (r) {
        if (!r.ok) { throw new Error("favorite failed: " + r.status); }
        return r.json();
      })
      .then(function (contact) {
        showFavorite(button, contact.favorite);
        return fetch(window.location.href, { headers: { "Accept": "text/html" } });
      })
      .then(function (r) { return r.text(); })
      .then(function (html) {
        swap(new DOMParser().parseFromString(html, "text/html"), "contact-nav");
      })
      .catch(function () { showFavorite(button, !next); });
  });
})();
"""


def render_shell(
    title: str,
    listing: ContactListOutput,
    q: str | None,
    outlet: str,
    active_id: str | None = None,
) -> str:
    """
    Render the complete HTML document: sidebar plus detail outlet.
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{_escape_html(title)}</title>
</head>
<body>
    {render_sidebar(title, listing, q, active_id)}
    <div id="detail">
        {outlet}
    </div>
    <script>{CLIENT_SCRIPT}</script>
</body>
</html>"""


# --- Loader Helpers ---


def _load_listing(service: ContactService, q: str | None) -> ContactListOutput:
    return run_search(SearchContactsInput(query=q), service)


def _load_contact_or_404(service: ContactService, contact_id: str) -> Contact:
    result = run_get(GetContactInput(contact_id=require_param(contact_id)), service)
    if not result.success or result.contact is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return result.contact


def _page(
    config: AppConfig,
    service: ContactService,
    q: str | None,
    outlet: str,
    active_id: str | None = None,
) -> HTMLResponse:
    listing = _load_listing(service, q)
    html = render_shell(config.app.title, listing, q, outlet, active_id)
    return HTMLResponse(content=html, status_code=200)


def _accept_quality(accept: str, media_type: str) -> float:
    """Quality value the Accept header gives an exact media type (0 if absent)."""
    best = 0.0
    for entry in accept.split(","):
        media, _, params = entry.partition(";")
        if media.strip().lower() != media_type:
            continue
        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.partition("=")
            if name.strip() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        best = max(best, quality)
    return best


def _wants_json(request: Request) -> bool:
    """True when the client prefers JSON over HTML."""
    accept = request.headers.get("accept", "")
    return _accept_quality(accept, "application/json") > _accept_quality(accept, "text/html")


# --- Root Shell ---


@router.get(
    "/",
    response_class=HTMLResponse,
    summary="Contact list",
    description="Sidebar with the (optionally filtered) contact list and the index page.",
)
def index_page(
    q: str | None = None,
    service: ContactService = Depends(get_contact_service),
    config: AppConfig = Depends(get_app_config),
) -> HTMLResponse:
    return _page(config, service, q, render_index(config.app.docs_url))


@router.post("/", summary="Create an empty contact")
def create_contact_action(
    service: ContactService = Depends(get_contact_service),
) -> Response:
    """Create an empty contact and go straight to its edit form."""
    result = run_create(CreateContactInput(), service)
    assert result.contact is not None
    return RedirectResponse(_contact_path(result.contact.id, "/edit"), status_code=303)


# --- Contact Detail ---


@router.get(
    "/contacts/{contact_id}",
    response_class=HTMLResponse,
    summary="Contact detail",
)
def contact_page(
    contact_id: str,
    q: str | None = None,
    service: ContactService = Depends(get_contact_service),
    config: AppConfig = Depends(get_app_config),
) -> HTMLResponse:
    contact = _load_contact_or_404(service, contact_id)
    return _page(config, service, q, render_contact_detail(contact, q), active_id=contact.id)


@router.post("/contacts/{contact_id}", summary="Toggle favorite")
def favorite_action(
    request: Request,
    contact_id: str,
    q: str | None = None,
    favorite: str | None = Form(None),
    service: ContactService = Depends(get_contact_service),
) -> Response:
    """
    Set favorite from the submitted value ("true" or anything else).

    JSON clients get the updated record back without navigating.
    """
    inp = SetFavoriteInput(contact_id=require_param(contact_id), favorite=favorite == "true")
    result = run_set_favorite(inp, service)
    if not result.success or result.contact is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    if _wants_json(request):
        return JSONResponse(content=result.contact.model_dump(mode="json"))
    return RedirectResponse(_with_query(_contact_path(contact_id), q), status_code=303)


# --- Contact Edit ---


@router.get(
    "/contacts/{contact_id}/edit",
    response_class=HTMLResponse,
    summary="Edit contact form",
)
def edit_page(
    contact_id: str,
    q: str | None = None,
    service: ContactService = Depends(get_contact_service),
    config: AppConfig = Depends(get_app_config),
) -> HTMLResponse:
    contact = _load_contact_or_404(service, contact_id)
    return _page(config, service, q, render_contact_form(contact), active_id=contact.id)


async def edit_form_fields(request: Request) -> dict[str, str]:
    """Submitted editable fields, empty strings kept as given."""
    form = await request.form()
    fields: dict[str, str] = {}
    for key in EDITABLE_FIELDS:
        value = form.get(key)
        if isinstance(value, str):
            fields[key] = value
    return fields


@router.post("/contacts/{contact_id}/edit", summary="Save contact edits")
def edit_action(
    contact_id: str,
    updates: dict[str, str] = Depends(edit_form_fields),
    service: ContactService = Depends(get_contact_service),
) -> Response:
    """Overwrite the submitted fields, then show the contact."""
    inp = UpdateContactInput(contact_id=require_param(contact_id), updates=updates)
    result = run_update(inp, service)
    if not result.success:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    return RedirectResponse(_contact_path(contact_id), status_code=303)


# --- Contact Delete ---


@router.post("/contacts/{contact_id}/destroy", summary="Delete contact")
def destroy_action(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> Response:
    result = run_delete(DeleteContactInput(contact_id=require_param(contact_id)), service)
    if not result.success:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    return RedirectResponse("/", status_code=303)
