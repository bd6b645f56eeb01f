"""Configuração central da aplicação (Pydantic Settings).

- Carrega variáveis do .env na raiz do projeto.
- Agrupa ajustes por área: App, CORS, Mongo, Realtime, Resumo do dia.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from pathlib import Path

# Resolve o .env na raiz do projeto (independente do CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Variáveis de configuração com valores padrão razoáveis.

    Os valores podem ser sobrescritos por variáveis de ambiente (.env).
    """
    # App
    app_name: str = "Rotina API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # CORS (front local em Vite/React)
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cors_allow_any: bool = False

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "rotina_db"
    mongo_tls: bool = False
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False
    mongo_timeout_ms: int = 15000

    # Realtime (WebSocket)
    realtime_enabled: bool = Field(
        True,
        validation_alias=AliasChoices("ROTINA_REALTIME_ENABLED", "REALTIME_ENABLED"),
    )
    # Deslocamento aplicado ao created_at enviado aos clientes conectados
    notification_clock_offset_hours: int = Field(
        0,
        validation_alias=AliasChoices("ROTINA_NOTIFICATION_CLOCK_OFFSET", "NOTIFICATION_CLOCK_OFFSET_HOURS"),
    )

    # Resumo do dia
    summary_preview_chars: int = 200

    @property
    def api_prefix_normalized(self) -> str:
        """Devolve `api_prefix` em formato consistente.

        - Sempre começa com '/'
        - Sem '/' final (exceto quando é só '/')
        - Se vazio, devolve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
