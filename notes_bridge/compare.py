"""Side-by-side comparison of AppleScript and JXA against Notes.app.

Each probe performs the same read-only operation in both languages so
output format, error text and timing can be compared on a real machine.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .applescript import execute_applescript
from .jxa import JXAOptions, JXAResult, build_notes_jxa, execute_jxa
from .logging import get_logger
from .runner import CommandRunner

logger = get_logger(__name__)


@dataclass(frozen=True)
class Probe:
    name: str
    applescript: str
    jxa: str  # fragment, wrapped with build_notes_jxa before running


PROBES = [
    Probe(
        name="List Accounts",
        applescript='tell application "Notes" to get name of every account',
        jxa='Notes.accounts().map(a => a.name()).join(", ");',
    ),
    Probe(
        name="List Folders (iCloud)",
        applescript='tell application "Notes" to tell account "iCloud" to get name of every folder',
        jxa=(
            'const iCloud = Notes.accounts.byName("iCloud");\n'
            'iCloud.folders().map(f => f.name()).join(", ");'
        ),
    ),
    Probe(
        name="Count Notes",
        applescript='tell application "Notes" to count notes',
        jxa="Notes.notes().length;",
    ),
    Probe(
        name="Get First Note Title",
        applescript='tell application "Notes" to get name of first note',
        jxa="Notes.notes()[0].name();",
    ),
    Probe(
        name="Get First Note Creation Date",
        applescript='tell application "Notes" to get creation date of first note',
        jxa="Notes.notes()[0].creationDate().toISOString();",
    ),
    Probe(
        name="Get Note with Emoji Title",
        applescript="""
tell application "Notes"
    set noteList to notes whose name contains "🎉"
    if (count of noteList) > 0 then
        return name of first item of noteList
    else
        return "No emoji notes found"
    end if
end tell""",
        jxa=(
            'const emojiNotes = Notes.notes().filter(n => n.name().includes("🎉"));\n'
            'emojiNotes.length > 0 ? emojiNotes[0].name() : "No emoji notes found";'
        ),
    ),
    Probe(
        name="Search Notes",
        applescript="""
tell application "Notes"
    set matchingNotes to notes whose name contains "test"
    return count of matchingNotes
end tell""",
        jxa='Notes.notes().filter(n => n.name().toLowerCase().includes("test")).length;',
    ),
    Probe(
        name="Non-existent Note",
        applescript='tell application "Notes" to get note "ThisNoteShouldNotExist12345"',
        jxa='Notes.notes.byName("ThisNoteShouldNotExist12345").name();',
    ),
]


def _timed(run: Callable[[], JXAResult], clock: Callable[[], float]) -> dict:
    start = clock()
    result = run()
    elapsed_ms = round((clock() - start) * 1000)
    return {**result.to_dict(), "time_ms": elapsed_ms}


def _verdict(applescript: dict, jxa: dict) -> str:
    if applescript["success"] != jxa["success"]:
        return "different-status"
    if applescript["output"] == jxa["output"]:
        return "identical"
    return "different-output"


def run_probe(
    probe: Probe,
    *,
    options: JXAOptions | None = None,
    runner: CommandRunner | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> dict:
    """Run one probe in both languages and compare the outcomes."""
    logger.info(f"Running probe: {probe.name}")
    applescript = _timed(
        lambda: execute_applescript(probe.applescript, options, runner=runner), clock
    )
    jxa = _timed(
        lambda: execute_jxa(build_notes_jxa(probe.jxa), options, runner=runner), clock
    )
    return {
        "name": probe.name,
        "applescript": applescript,
        "jxa": jxa,
        "comparison": _verdict(applescript, jxa),
    }


def summarize(outcomes: list[dict]) -> dict:
    """Timing totals over probes that succeeded in both languages."""
    both = [
        o for o in outcomes if o["applescript"]["success"] and o["jxa"]["success"]
    ]
    summary: dict = {"probes": len(outcomes), "successful": len(both)}
    if not both:
        summary["ratio"] = None
        return summary

    applescript_ms = sum(o["applescript"]["time_ms"] for o in both)
    jxa_ms = sum(o["jxa"]["time_ms"] for o in both)
    summary.update(
        {
            "applescript_total_ms": applescript_ms,
            "applescript_avg_ms": round(applescript_ms / len(both)),
            "jxa_total_ms": jxa_ms,
            "jxa_avg_ms": round(jxa_ms / len(both)),
            # >1 means JXA was faster
            "ratio": round(applescript_ms / jxa_ms, 2) if jxa_ms else None,
        }
    )
    return summary


def run_comparison(
    probes: list[Probe] | None = None,
    *,
    options: JXAOptions | None = None,
    runner: CommandRunner | None = None,
) -> dict:
    """Run every probe and return {"results": [...], "summary": {...}}."""
    outcomes = [
        run_probe(probe, options=options, runner=runner)
        for probe in (PROBES if probes is None else probes)
    ]
    return {"results": outcomes, "summary": summarize(outcomes)}
