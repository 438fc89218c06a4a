"""
Modelo de datos del pipeline: la noticia normalizada que fluye entre
fuentes, deduplicación y presentación.
"""
from dataclasses import dataclass, field, asdict

UNKNOWN_PUBLISH_TIME = "未知时间"


@dataclass(frozen=True)
class NewsItem:
    """
    Noticia normalizada, independiente de la fuente.
    Inmutable: el pipeline solo filtra y reordena, nunca modifica campos.
    """
    title: str
    summary: str
    url: str
    source: str
    publish_time: str = UNKNOWN_PUBLISH_TIME
    matched_keywords: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.title:
            raise ValueError("NewsItem requiere un título no vacío")
        # Aceptar listas desde las fuentes pero guardar una tupla
        object.__setattr__(self, "matched_keywords", tuple(self.matched_keywords))

    def identity_key(self) -> tuple[str, str]:
        """Clave de duplicado exacto: (título, fuente)."""
        return (self.title, self.source)

    def comparison_text(self) -> str:
        """Texto usado para detectar casi-duplicados."""
        return f"{self.title}\n{self.summary}"

    def to_dict(self) -> dict:
        d = asdict(self)
        d["matched_keywords"] = list(self.matched_keywords)
        return d
