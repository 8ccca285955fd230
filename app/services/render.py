"""Jinja2 render pipeline with atomically swapped snapshots.

A request captures :meth:`RenderPipeline.snapshot` once and renders against
that object even if :meth:`RenderPipeline.reinitialize` swaps in a newer
one while the request is waiting on the CMS.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Tuple, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

ERROR_TEMPLATE = "error.html"


@dataclass(frozen=True)
class Snapshot:
    """An immutable, fully compiled template set."""

    generation: int
    env: Environment

    def render(self, template: str, **context: Any) -> str:
        return self.env.get_template(template).render(**context)


class RenderPipeline:
    def __init__(
        self,
        template_dir: Union[Path, str],
        required: Iterable[str] = (),
    ) -> None:
        self.template_dir = Path(template_dir)
        self.required: Tuple[str, ...] = tuple(dict.fromkeys([*required, ERROR_TEMPLATE]))
        self._lock = asyncio.Lock()
        self._snapshot = self._build(1)

    @property
    def generation(self) -> int:
        return self._snapshot.generation

    def snapshot(self) -> Snapshot:
        return self._snapshot

    async def reinitialize(self) -> Snapshot:
        """Build a fresh snapshot and swap it in.

        Rebuilds are serialised.  If compilation fails the exception
        propagates and the current snapshot stays in place.
        """
        async with self._lock:
            snapshot = await asyncio.to_thread(self._build, self._snapshot.generation + 1)
            self._snapshot = snapshot
        logger.info("Render pipeline reinitialised", extra={"generation": snapshot.generation})
        return snapshot

    def _build(self, generation: int) -> Snapshot:
        env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            # Snapshots never change after compilation; edits need a rebuild.
            auto_reload=False,
        )
        # Compile everything up front so a broken template fails the rebuild,
        # not a later request.
        names = set(env.list_templates(extensions=["html"])) | set(self.required)
        for name in sorted(names):
            env.get_template(name)
        return Snapshot(generation=generation, env=env)
