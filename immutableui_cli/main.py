import json
from typing import Optional

import typer

from immutableui import Bindings, Program, configure_logging, get_config
from immutableui.config import reset_config

# Create the main Typer application object
app = typer.Typer(
    name="immutableui",
    help="Inspect bindings and run demo programs for immutableui.",
    add_completion=False
)


@app.callback()
def main(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML configuration file to load instead of immutableui.yaml."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
):
    """Common options: configuration and logging."""
    if config_file is not None:
        reset_config()
        cfg = get_config(config_file=config_file, prefer_embedded=False)
        if cfg.source is None:
            print(f"❌ Error: Could not load configuration from '{config_file}'")
            raise typer.Exit(code=1)
    cfg = get_config()
    if verbose:
        cfg.set("logging.level", "DEBUG")
    configure_logging(cfg)


# --- The counter program used by both demos ---

def counter_init():
    return {"count": 0, "step": 1}


def counter_update(msg, model):
    if msg == "increment":
        return {**model, "count": model["count"] + model["step"]}
    if msg == "decrement":
        return {**model, "count": model["count"] - model["step"]}
    if msg == "reset":
        return counter_init()
    raise ValueError(f"Unknown message: {msg!r}")


def counter_view(model, dispatch):
    from immutableui.widgets import button, label, stack_layout

    return stack_layout(children=[
        label(text=f"Count: {model['count']}", font_size=18.0),
        button(text="+", clicked=lambda: dispatch("increment")),
        button(text="-", clicked=lambda: dispatch("decrement"), is_enabled=model["count"] > 0),
        button(text="Reset", clicked=lambda: dispatch("reset"), is_visible=model["count"] != 0),
    ])


def qt_counter_view(model, dispatch):
    from immutableui.qt import panel, push_button, qlabel

    return panel(children=[
        qlabel(text=f"Count: {model['count']}"),
        push_button(text="+", clicked=lambda: dispatch("increment")),
        push_button(text="-", clicked=lambda: dispatch("decrement"), enabled=model["count"] > 0),
        push_button(text="Reset", clicked=lambda: dispatch("reset")),
    ])


def _load_bindings(toolkit: str) -> Bindings:
    if toolkit == "plain":
        from immutableui.widgets import ui
        return ui
    if toolkit == "qt":
        from immutableui.qt import qt
        return qt
    print(f"❌ Error: Unknown toolkit '{toolkit}' (expected 'plain' or 'qt')")
    raise typer.Exit(code=1)


# --- CLI Commands ---

@app.command()
def bindings(
    toolkit: str = typer.Option("plain", "--toolkit", "-t", help="Which bindings to list: plain or qt."),
):
    """
    Lists the bound types with their members.
    """
    registry = _load_bindings(toolkit)
    for binding in registry:
        base = f" : {binding.base.name}" if binding.base is not None else ""
        flag = "" if binding.creatable else "  (not creatable)"
        print(f"{binding.name}{base}{flag}")
        for member in binding.own_members:
            print(f"    {member.unique_name:<20} {member.kind.value:<14} default={member.default!r}")


@app.command()
def demo(
    clicks: int = typer.Option(3, "--clicks", "-n", help="How many times to press '+'."),
):
    """
    Runs the counter program on the plain widget toolkit, printing the tree after each render.
    """
    from immutableui.widgets import dump

    renders = []
    program = Program(counter_init, counter_update, counter_view, on_render=renders.append)
    print(dump(program.root))
    plus = program.root.children[1]
    for _ in range(clicks):
        plus.click()
        print("---")
        print(dump(program.root))

    # The same live widgets are patched on every render
    same_root = all(r is renders[0] for r in renders)
    print(f"\n✅ {len(renders)} renders, root reused: {same_root}")


@app.command(name="qt-demo")
def qt_demo():
    """
    Runs the counter program in a PySide6 window.
    """
    from immutableui.qt import ensure_app

    qt_app = ensure_app()
    program = Program(counter_init, counter_update, qt_counter_view)
    program.root.setWindowTitle("immutableui counter")
    program.root.show()
    raise typer.Exit(code=qt_app.exec())


@app.command()
def config():
    """
    Shows where configuration was loaded from.
    """
    cfg = get_config()
    print(json.dumps(cfg.describe(), indent=2))
    if cfg.as_dict():
        print(json.dumps(cfg.as_dict(), indent=2, default=str))


if __name__ == "__main__":
    app()
