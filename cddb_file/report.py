from __future__ import annotations

from .disc import Disc


def format_duration(seconds: int) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


def disc_header(disc: Disc) -> str:
    header = f"{disc.artist} - {disc.title}"
    if disc.year:
        header += f" ({disc.year})"
    if disc.genre:
        header += f" [{disc.genre}]"
    return header


def render_text(disc: Disc, show_extended: bool = True) -> str:
    lines = [disc_header(disc)]
    ids = disc.all_ids
    if ids:
        lines.append(f"Disc ID: {', '.join(ids)}")
    lines.append(f"Length: {format_duration(disc.length_seconds)}")
    if disc.revision:
        lines.append(f"Revision: {disc.revision}")
    if disc.submitted_by:
        lines.append(f"Submitted via: {disc.submitted_by}")
    if show_extended and disc.extended_text:
        lines.append(disc.extended_text)
    lines.append("")
    tracks = disc.tracks()
    width = len(str(len(tracks)))
    for track in tracks:
        lines.append(
            f"{track.number:0{max(2, width)}d}. {track.title}  {format_duration(track.length_seconds)}"
        )
        if show_extended and track.extended_text:
            lines.append(f"    {track.extended_text}")
    return "\n".join(lines)
