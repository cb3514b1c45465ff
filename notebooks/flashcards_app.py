import marimo

__generated_with = "0.13.10"
app = marimo.App(width="medium", app_title="Flashcards From Table")


@app.cell
def _imports():
    import marimo as mo

    return (mo,)


# ---------------------------------------------------------------------------
# Bootstrap: paths, store, plugins
# ---------------------------------------------------------------------------


@app.cell
def _setup():
    import sys
    from pathlib import Path

    _ROOT = Path(__file__).parent.parent
    _SRC = _ROOT / "src"
    _VAULT_DIR = _ROOT / "vault"
    _PLUGINS_DIR = _ROOT / "plugins"

    if str(_SRC) not in sys.path:
        sys.path.insert(0, str(_SRC))

    from flashtable.plugin import fire_hook, load_all_plugins
    from flashtable.settings import load_settings
    from flashtable.store import LocalVault

    store = LocalVault(_VAULT_DIR)
    _plugins = load_all_plugins(_PLUGINS_DIR)
    for _plugin in _plugins:
        fire_hook(
            [_plugin],
            "on_load",
            store=store,
            settings=load_settings(_plugin.descriptor.settings_path),
        )
    flashcards_plugin = next(
        (p for p in _plugins if p.descriptor.id == "flashcards-from-table"), None
    )
    return flashcards_plugin, store


# ---------------------------------------------------------------------------
# Reactive state
# ---------------------------------------------------------------------------


@app.cell
def _state(mo):
    # Bumped after every button press so the review cell re-renders
    get_tick, set_tick = mo.state(0)
    get_error, set_error = mo.state("")
    # Path of the last deck created by the init command; refreshes the picker
    get_created, set_created = mo.state("")
    return get_created, get_error, get_tick, set_created, set_error, set_tick


# ---------------------------------------------------------------------------
# Document picker + init command
# ---------------------------------------------------------------------------


@app.cell
def _picker(mo, store, get_created):
    created = get_created()
    documents = store.list_documents()
    doc_picker = mo.ui.dropdown(
        options=documents,
        value=created if created in documents else (documents[0] if documents else None),
        label="Document",
    )
    new_deck_name = mo.ui.text(placeholder="new-deck.md", label="New deck")
    return doc_picker, new_deck_name


@app.cell
def _init_command(mo, flashcards_plugin, new_deck_name, set_created, set_tick):
    def _init_table(_):
        name = new_deck_name.value.strip()
        if name and flashcards_plugin is not None:
            flashcards_plugin.run_command("init-flashcards-table", path=name)
            set_created(name)
            set_tick(lambda t: t + 1)

    init_btn = mo.ui.button(label="Init Flashcards Table", on_click=_init_table)
    return (init_btn,)


# ---------------------------------------------------------------------------
# Review panel
# ---------------------------------------------------------------------------


@app.cell
def _review(mo, flashcards_plugin, doc_picker, get_tick, get_error, set_tick, set_error):
    from flashtable.document import is_link, parse_link

    get_tick()

    def _cell_md(text):
        link = parse_link(text) if is_link(text) else None
        return mo.md(f"[{link[0]}]({link[1]})" if link else text)

    def _act(action):
        def _handler(_):
            try:
                action()
                set_error("")
            except OSError as exc:
                set_error(f"Write failed, changes kept in memory: {exc}")
            set_tick(lambda t: t + 1)

        return _handler

    path = doc_picker.value
    session = flashcards_plugin.on_file_open(path) if (flashcards_plugin and path) else None

    if session is None or not session.ready:
        reload_btn = mo.ui.button(
            label="Reload", on_click=_act(session.reload if session else (lambda: None))
        )
        messages = session.message if session else ["Unable to find flashcards"]
        review_panel = mo.vstack(
            [mo.md("#### Flashcards"), mo.divider(), *[mo.md(m) for m in messages], mo.divider(), reload_btn]
        )
    else:
        card = session.current
        answer = (
            _cell_md(card.answer)
            if session.answer_visible
            else mo.ui.button(label="Show answer", on_click=_act(session.reveal))
        )
        controls = mo.hstack(
            [
                mo.ui.button(label="Skip", on_click=_act(session.skip)),
                mo.ui.button(label="Next", on_click=_act(session.next)),
                mo.ui.button(label="Save", on_click=_act(session.save)),
            ],
            gap="10px",
            justify="start",
        )
        error = get_error()
        review_panel = mo.vstack(
            [
                mo.md("#### Flashcards"),
                mo.divider(),
                _cell_md(card.question),
                answer,
                mo.divider(),
                controls,
                mo.callout(mo.md(error), kind="danger") if error else mo.md(""),
                mo.md(f"_Reviewed {card.review_count} times, last on {card.last_reviewed}._"),
            ]
        )
    return review_panel, session


# ---------------------------------------------------------------------------
# Statistics tab (DeckDB)
# ---------------------------------------------------------------------------


@app.cell
def _stats(mo, session, get_tick):
    from flashtable.db import DeckDB

    get_tick()

    if session is None or not session.ready:
        stats_panel = mo.md("_Open a flashcard document to see statistics._")
    else:
        with DeckDB(session.document.dataset, session.tracker) as db:
            stats_panel = mo.accordion(
                {
                    "Cards": mo.ui.table(db.table_view()),
                    "Review counts": mo.ui.table(db.count_distribution()),
                    "Least reviewed": mo.ui.table(db.least_reviewed()),
                }
            )
    return (stats_panel,)


# ---------------------------------------------------------------------------
# Main layout
# ---------------------------------------------------------------------------


@app.cell
def _main_layout(mo, doc_picker, new_deck_name, init_btn, review_panel, stats_panel):
    layout = mo.vstack(
        [
            mo.hstack([doc_picker, new_deck_name, init_btn], gap="8px", align="end"),
            mo.ui.tabs({"Review": review_panel, "Statistics": stats_panel}),
        ],
        gap="8px",
    )
    return (layout,)


@app.cell
def _render(layout):
    layout  # noqa: B018  marimo displays the last expression as cell output
    return


if __name__ == "__main__":
    app.run()
