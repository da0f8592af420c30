"""pagemeta.pipeline — ordered composition of extraction stages.

Every stage follows the ``runtime_checkable`` :class:`PipelineStage`
contract: it receives the shared :class:`~pagemeta.items.Article`, fills
in the fields it owns, and returns the same record.  Stages run strictly
in list order, one article at a time::

    from pagemeta import Configuration, MetaExtractor, Pipeline

    config = Configuration(language="de")
    pipeline = Pipeline([MetaExtractor(config)])
    pipeline.run(article)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagemeta.items import Article

logger = logging.getLogger(__name__)


@runtime_checkable
class PipelineStage(Protocol):
    """One step of the extraction pipeline."""

    name: str

    def run(self, article: Article) -> Article:
        """Mutate *article* in place and return it."""
        ...


class Pipeline:
    """Run a fixed sequence of :class:`PipelineStage` objects over an article.

    Stage errors are not caught here; they propagate to the caller.
    """

    def __init__(self, stages: Iterable[PipelineStage] = ()) -> None:
        self._stages: list[PipelineStage] = []
        for stage in stages:
            self.add(stage)

    @property
    def stages(self) -> list[PipelineStage]:
        return list(self._stages)

    def add(self, stage: PipelineStage) -> Pipeline:
        """Append *stage* and return the pipeline for chaining."""
        if not isinstance(stage, PipelineStage):
            raise TypeError(f"{stage!r} does not implement PipelineStage")
        self._stages.append(stage)
        return self

    def run(self, article: Article) -> Article:
        for stage in self._stages:
            logger.debug("pipeline: running stage %s on %s", stage.name, article.url or "<no url>")
            article = stage.run(article)
        return article
