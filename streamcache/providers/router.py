"""Model Router - maps canonical model names to provider model names.

Plain OpenAI endpoints take the canonical name unchanged. Azure endpoints
address a deployment instead, and exactly one deployment is configured per
process: the one serving the default model.
"""

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from streamcache.core.config import Settings

logger = logging.getLogger(__name__)


class ModelRouter:
    """Maps a canonical model name to the name sent to the provider.

    Without a table the mapping is the identity. With a table, only the
    listed model is mapped and every other model maps to "" (unmapped).

    Example:
        >>> router = ModelRouter({"gpt-4-turbo-preview": "gpt4-prod"})
        >>> router.map("gpt-4-turbo-preview")
        'gpt4-prod'
        >>> router.map("gpt-3.5-turbo")
        ''
    """

    def __init__(self, table: Optional[dict[str, str]] = None) -> None:
        self._table = dict(table) if table is not None else None

    @classmethod
    def from_deployment(cls, default_model: str, deployment: str) -> "ModelRouter":
        """Identity router when no deployment is given, else a single-entry table."""
        if not deployment:
            return cls()
        return cls({default_model: deployment})

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ModelRouter":
        """Build the router for the configured API type."""
        if not settings.is_azure:
            return cls()
        router = cls.from_deployment(settings.default_model, settings.azure_deployment)
        if router.is_identity:
            logger.debug("azure api type without deployment, model names pass through")
        return router

    @property
    def is_identity(self) -> bool:
        """True when no table is configured."""
        return self._table is None

    def map(self, model: str) -> str:
        """Return the provider model name, or "" when the model is unmapped."""
        if self._table is None:
            return model
        return self._table.get(model, "")
