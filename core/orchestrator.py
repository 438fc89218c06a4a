"""
Orquestador central de la búsqueda de noticias.
Coordina las fuentes, la deduplicación y el recorte del resultado.

Diseño de concurrencia:
- Cada fuente corre en su propia tarea asyncio; ninguna comparte estado.
- Los resultados se concatenan en el orden configurado de las fuentes,
  no en el orden de llegada, y solo después de que todas terminaron.
- Cada fuente impone su propio timeout. El deadline global es opcional.
"""
import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol, Sequence

from .deduplicator import deduplicate_by_content, deduplicate_by_identity
from .errors import InvalidConfiguration, SourceError
from .matcher import parse_query
from .models import NewsItem
from .similarity import validate_threshold

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 20


class NewsSource(Protocol):
    """Contrato mínimo que el orquestador espera de una fuente."""

    name: str

    def is_available(self) -> bool: ...

    async def search(self, keywords: list[str]) -> list[NewsItem]: ...


class SourceStatus(str, enum.Enum):
    SUCCESS = "success"
    FAILED = "failed"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"


class RunStatus(str, enum.Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class SourceOutcome:
    source: str
    status: SourceStatus
    items: list[NewsItem] = field(default_factory=list)
    error: Optional[str] = None
    duration_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        return self.status in (SourceStatus.FAILED, SourceStatus.TIMEOUT)


@dataclass
class AggregationResult:
    """Resultado de una agregación más las estadísticas de cada fuente."""
    query: str
    keywords: list[str]
    items: list[NewsItem]
    outcomes: list[SourceOutcome]
    raw_count: int
    unique_count: int
    status: RunStatus
    started_at: datetime
    finished_at: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    @property
    def failed_sources(self) -> list[str]:
        return [o.source for o in self.outcomes if o.failed]


def validate_max_results(max_results: int) -> int:
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise InvalidConfiguration(f"Tope de resultados inválido: {max_results!r}")
    if max_results < 0:
        raise InvalidConfiguration(f"Tope de resultados negativo: {max_results}")
    return max_results


class NewsAggregator:
    """
    Coordina una búsqueda completa:
    1. Parsea la consulta en keywords
    2. Lanza todas las fuentes en paralelo con las mismas keywords
    3. Espera a que todas terminen (éxito, fallo o no disponible)
    4. Concatena en orden de configuración y elimina duplicados exactos
    5. Opcionalmente elimina casi-duplicados
    6. Recorta a `max_results`

    Una fuente que falla aporta cero noticias y queda registrada en su
    `SourceOutcome`; nunca aborta la agregación.
    """

    def __init__(
        self,
        sources: Sequence[NewsSource],
        deadline: Optional[float] = None,
        similarity_threshold: Optional[float] = None,
    ):
        if deadline is not None and (
            isinstance(deadline, bool)
            or not isinstance(deadline, (int, float))
            or deadline <= 0
        ):
            raise InvalidConfiguration(f"Deadline de agregación inválido: {deadline!r}")
        if similarity_threshold is not None:
            similarity_threshold = validate_threshold(similarity_threshold)

        self.sources = list(sources)
        self.deadline = deadline
        self.similarity_threshold = similarity_threshold

    async def run(
        self,
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> AggregationResult:
        """Ejecuta una agregación completa y retorna resultado y estadísticas."""
        max_results = validate_max_results(max_results)
        started_at = datetime.now()
        keywords = parse_query(query)

        logger.info(
            f"Buscando noticias: keywords={keywords or '(todas)'}, "
            f"{len(self.sources)} fuentes"
        )

        outcomes = await self._fetch_all(keywords)

        collected: list[NewsItem] = []
        for outcome in outcomes:
            collected.extend(outcome.items)

        unique = deduplicate_by_identity(collected)
        logger.info(f"Deduplicación: {len(collected)} antes, {len(unique)} después")

        if self.similarity_threshold is not None:
            unique = deduplicate_by_content(unique, self.similarity_threshold)
            logger.info(f"Casi-duplicados eliminados: quedan {len(unique)}")

        items = unique[:max_results]
        finished_at = datetime.now()

        result = AggregationResult(
            query=query,
            keywords=keywords,
            items=items,
            outcomes=outcomes,
            raw_count=len(collected),
            unique_count=len(unique),
            status=self._run_status(outcomes),
            started_at=started_at,
            finished_at=finished_at,
        )
        logger.info(
            f"Búsqueda '{query}' finalizada ({result.status.value}): "
            f"{len(items)} noticias en {result.duration_seconds:.1f}s"
        )
        return result

    async def _fetch_all(self, keywords: list[str]) -> list[SourceOutcome]:
        """
        Lanza una tarea por fuente y espera a todas.
        Sin deadline no se cancela ninguna; con deadline, las pendientes
        se cancelan y se reportan como TIMEOUT.
        """
        tasks = [
            asyncio.create_task(self._scan_source_isolated(source, list(keywords)))
            for source in self.sources
        ]
        if not tasks:
            return []

        _, pending = await asyncio.wait(tasks, timeout=self.deadline)
        if pending:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        outcomes = []
        for source, task in zip(self.sources, tasks):
            if task in pending:
                logger.warning(
                    f"Fuente {source.name}: sin respuesta antes del deadline "
                    f"de {self.deadline}s"
                )
                outcomes.append(SourceOutcome(
                    source=source.name,
                    status=SourceStatus.TIMEOUT,
                    error=f"deadline de {self.deadline}s excedido",
                    duration_seconds=float(self.deadline),
                ))
            else:
                outcomes.append(task.result())
        return outcomes

    async def _scan_source_isolated(
        self,
        source: NewsSource,
        keywords: list[str],
    ) -> SourceOutcome:
        """
        Consulta una fuente y convierte cualquier error en un SourceOutcome.
        Completamente aislada del resto de las fuentes.
        """
        start = time.monotonic()

        try:
            if not source.is_available():
                logger.info(f"Fuente {source.name}: no disponible (falta configuración)")
                return SourceOutcome(source=source.name, status=SourceStatus.UNAVAILABLE)
            items = list(await source.search(keywords))
        except SourceError as e:
            logger.error(f"Error en fuente {source.name}: {e.reason}")
            return SourceOutcome(
                source=source.name,
                status=SourceStatus.FAILED,
                error=e.reason[:500],
                duration_seconds=time.monotonic() - start,
            )
        except Exception as e:
            logger.exception(f"Error inesperado en fuente {source.name}: {e}")
            return SourceOutcome(
                source=source.name,
                status=SourceStatus.FAILED,
                error=(str(e) or e.__class__.__name__)[:500],
                duration_seconds=time.monotonic() - start,
            )

        elapsed = time.monotonic() - start
        logger.info(f"Fuente {source.name}: {len(items)} noticias en {elapsed:.1f}s")
        return SourceOutcome(
            source=source.name,
            status=SourceStatus.SUCCESS,
            items=items,
            duration_seconds=elapsed,
        )

    @staticmethod
    def _run_status(outcomes: list[SourceOutcome]) -> RunStatus:
        failures = sum(1 for o in outcomes if o.failed)
        if outcomes and failures == len(outcomes):
            return RunStatus.FAILED
        if failures > 0:
            return RunStatus.PARTIAL
        return RunStatus.SUCCESS


async def aggregate(
    query: str,
    sources: Sequence[NewsSource],
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[NewsItem]:
    """Atajo: agrega y retorna solo la lista final de noticias."""
    result = await NewsAggregator(sources).run(query, max_results=max_results)
    return result.items
