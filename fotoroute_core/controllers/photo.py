"""Photo controller.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import html
import logging

from fotoroute_core.controllers.base import Controller

logger = logging.getLogger(__name__)


class PhotoController(Controller):
    """Photo gallery pages.

    With a database pool injected, the gallery lists rows of the
    ``photos`` table (``id``, ``title``).
    """

    def index(self) -> None:
        self.html("<h1>Photos Gallery</h1>")
        if self.db is None:
            self.html("<p>List of all photos</p>")
            return

        rows = self.db.query("SELECT id, title FROM photos ORDER BY id")
        if not rows:
            self.html("<p>No photos yet</p>")
            return

        self.html("<ul>")
        for row in rows:
            self.html(
                f'<li><a href="/photos/{row["id"]}">{html.escape(str(row["title"]))}</a></li>'
            )
        self.html("</ul>")

    def show(self, photo_id: str) -> None:
        self.html("<h1>Photo Details</h1>")
        self.html(f"<p>Showing photo with ID: {html.escape(photo_id)}</p>")


__all__ = [
    "PhotoController",
]
