"""Diary CLI - local journal with rewards."""

import json
import logging
import sys
from datetime import datetime

import click

from .config import load_config
from .core.color import to_rgb_hex
from .core.entries import DiaryEntry, parse_mood, parse_tags
from .store import DiaryStore
from .workflows import get_store

MISSION_CHOICES = {"write-today": "claim_write_today", "tag-three": "claim_tag_mission"}


@click.group()
@click.version_option(package_name="diary")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Diary - a private journal that rewards the writing habit."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.ensure_object(dict)


def _store(ctx) -> DiaryStore:
    """One store per invocation, shared by the command through the context."""
    if "store" not in ctx.obj:
        config = load_config()
        ctx.obj["config"] = config
        ctx.obj["store"] = get_store(config)
    return ctx.obj["store"]


def _resolve(store: DiaryStore, entry_id: str) -> DiaryEntry:
    """Find an entry by id or unique id prefix, exiting on failure."""
    entry = store.get(entry_id)
    if entry is not None:
        return entry

    matches = [e for e in store.entries if e.id.startswith(entry_id)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        click.echo(f"Error: no entry with id {entry_id}", err=True)
    else:
        click.echo(f"Error: id prefix {entry_id} is ambiguous ({len(matches)} entries)", err=True)
    sys.exit(1)


def _parse_date(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        click.echo(f"Error: invalid date {value!r} (expected YYYY-MM-DD or ISO-8601)", err=True)
        sys.exit(1)


def _entry_line(entry: DiaryEntry) -> str:
    mood = f" {entry.mood}" if entry.mood else ""
    tags = f"  [{', '.join(entry.tags)}]" if entry.tags else ""
    first_line = entry.body.splitlines()[0] if entry.body else ""
    return f"{entry.id[:8]}  {entry.date.strftime('%Y-%m-%d')}{mood}  {entry.title}{tags}\n          {first_line}"


@main.command("list")
@click.option("--tag", default=None, help="Only entries with this tag")
@click.option("--search", "-s", default="", help="Case-insensitive text search")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(ctx, tag: str | None, search: str, as_json: bool):
    """List entries, pinned first."""
    store = _store(ctx)
    pinned, others = store.sections(search, tag)

    if as_json:
        click.echo(json.dumps([e.to_dict() for e in pinned + others], indent=2, ensure_ascii=False))
        return

    if not pinned and not others:
        click.echo("No entries.")
        return

    if pinned:
        click.echo("### Pinned")
        for entry in pinned:
            click.echo(_entry_line(entry))
        click.echo()

    click.echo("### All Entries")
    for entry in others:
        click.echo(_entry_line(entry))


@main.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx, entry_id: str):
    """Show one entry."""
    entry = _resolve(_store(ctx), entry_id)
    click.echo(entry.title)
    click.echo(entry.date.strftime("%A, %B %d, %Y") + (f"  {entry.mood}" if entry.mood else ""))
    if entry.tags:
        click.echo("Tags: " + ", ".join(entry.tags))
    if entry.pinned:
        click.echo("Pinned")
    click.echo()
    click.echo(entry.body)


@main.command()
@click.option("--title", "-t", default="", help="Entry title")
@click.option("--body", "-b", default=None, help="Entry text (prompted if omitted)")
@click.option("--tags", default="", help="Comma-separated tags")
@click.option("--mood", default="", help="Mood emoji")
@click.option("--date", "-d", "entry_date", default=None, help="Date the entry is about (ISO-8601)")
@click.option("--pin", is_flag=True, help="Pin this entry")
@click.pass_context
def add(ctx, title: str, body: str | None, tags: str, mood: str, entry_date: str | None, pin: bool):
    """Write a new entry."""
    if body is None:
        body = click.prompt("Body", default="", show_default=False)
    if not title.strip() and not body.strip():
        click.echo("Error: an entry needs a title or a body", err=True)
        sys.exit(1)

    store = _store(ctx)
    entry = DiaryEntry(
        title=title,
        body=body,
        date=_parse_date(entry_date) or store.clock(),
        tags=parse_tags(tags),
        mood=parse_mood(mood),
        pinned=pin,
    )
    store.add(entry)
    click.echo(f"✓ Saved entry {entry.id[:8]} (+10 pts, streak {store.rewards.current_streak})")


@main.command()
@click.argument("entry_id")
@click.option("--title", "-t", default=None, help="New title")
@click.option("--body", "-b", default=None, help="New text")
@click.option("--tags", default=None, help="Replace tags (comma-separated)")
@click.option("--mood", default=None, help="New mood emoji (empty to clear)")
@click.option("--date", "-d", "entry_date", default=None, help="New date (ISO-8601)")
@click.pass_context
def edit(ctx, entry_id: str, title, body, tags, mood, entry_date):
    """Edit an existing entry in place."""
    store = _store(ctx)
    entry = _resolve(store, entry_id)

    updated = DiaryEntry(
        id=entry.id,
        title=entry.title if title is None else title,
        body=entry.body if body is None else body,
        date=_parse_date(entry_date) or entry.date,
        tags=entry.tags if tags is None else parse_tags(tags),
        mood=entry.mood if mood is None else parse_mood(mood),
        pinned=entry.pinned,
    )
    if not updated.title.strip() and not updated.body.strip():
        click.echo("Error: an entry needs a title or a body", err=True)
        sys.exit(1)

    store.save_entry(updated)
    click.echo(f"✓ Updated entry {entry.id[:8]}")


@main.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete(ctx, entry_id: str, yes: bool):
    """Delete an entry."""
    store = _store(ctx)
    entry = _resolve(store, entry_id)
    if not yes and not click.confirm(f"Delete '{entry.title}'?"):
        return
    store.delete(entry)
    click.echo(f"✓ Deleted entry {entry.id[:8]}")


@main.command()
@click.argument("entry_id")
@click.pass_context
def pin(ctx, entry_id: str):
    """Toggle the pinned flag of an entry."""
    store = _store(ctx)
    entry = _resolve(store, entry_id)
    store.toggle_pin(entry)
    state = "Unpinned" if entry.pinned else "Pinned"
    click.echo(f"✓ {state} entry {entry.id[:8]}")


@main.command()
@click.pass_context
def tags(ctx):
    """List all tags in use."""
    all_tags = _store(ctx).all_tags()
    if not all_tags:
        click.echo("No tags yet.")
        return
    for tag in all_tags:
        click.echo(f"• {tag}")


@main.command()
@click.pass_context
def rewards(ctx):
    """Show points, streak, badges and missions."""
    store = _store(ctx)
    state = store.rewards

    click.echo(f"Points: {state.points}")
    click.echo(f"Streak: {state.current_streak} days")
    click.echo()
    click.echo("Badges")
    if not state.badges:
        click.echo("  Keep writing to earn badges!")
    for badge in state.badges:
        click.echo(f"  ★ {badge}")
    click.echo()
    click.echo("Daily Missions")
    for mission in store.missions():
        mark = "✓" if mission.completed else " "
        click.echo(f"  [{mark}] {mission.title} (reward: {mission.reward} pts)")


@main.command()
@click.argument("mission", type=click.Choice(sorted(MISSION_CHOICES)))
@click.pass_context
def claim(ctx, mission: str):
    """Claim a mission reward."""
    store = _store(ctx)
    before = store.rewards.points
    awarded = getattr(store, MISSION_CHOICES[mission])()
    if awarded:
        click.echo(f"✓ Claimed {mission} (+{store.rewards.points - before} pts)")
    else:
        click.echo(f"Mission {mission} is not available right now.")


@main.command()
@click.option("--name", default="", help="Display name")
@click.option("--color", "color_hex", default="", help="Accent hex (e.g. #4F46E5)")
@click.pass_context
def profile(ctx, name: str, color_hex: str):
    """Show or update your profile."""
    store = _store(ctx)
    if name or color_hex:
        store.update_profile(name=name, color_hex=color_hex)
        click.echo("✓ Profile saved")

    current = store.profile
    click.echo(f"Name:   {current.name}")
    click.echo(f"Accent: {current.preferred_color_hex} (renders as {to_rgb_hex(current.preferred_color_hex)})")


@main.command()
@click.pass_context
def export(ctx):
    """Dump all entries as JSON (debug)."""
    store = _store(ctx)
    click.echo(store.export_entries(ctx.obj["config"].export_preview_chars))


if __name__ == "__main__":
    main()
