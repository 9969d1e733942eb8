from __future__ import annotations

import json
from pathlib import Path

from ..config import Settings
from ..disc import Disc
from ..report import render_text


def run(settings: Settings, path: Path, *, json_output: bool = False) -> None:
    disc = Disc.from_path(
        path, encoding=settings.parser.encoding, errors=settings.parser.errors
    )
    if json_output:
        print(
            json.dumps(
                disc.to_record(),
                indent=settings.output.json_indent,
                ensure_ascii=False,
            )
        )
        return
    print(render_text(disc, show_extended=settings.output.show_extended))
