"""fal.ai text-to-video client wrapper."""

import logging
import random
from typing import Any, Optional

import fal_client

from ..config import config
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class FalVideoClient:
    """Client wrapper for fal.ai video generation applications.

    ``subscribe`` blocks until the queued job finishes, so one call is one
    complete render. Results are returned as the provider's raw JSON; their
    shape differs between applications and versions.
    """

    DEFAULT_NEGATIVE_PROMPT = "poor quality, blurry, distorted"
    DEFAULT_GUIDANCE_SCALE = 10.0
    MAX_SEED = 10_000_000

    def __init__(
        self,
        api_key: Optional[str] = None,
        application: Optional[str] = None,
        negative_prompt: str = DEFAULT_NEGATIVE_PROMPT,
        guidance_scale: float = DEFAULT_GUIDANCE_SCALE,
    ) -> None:
        """Initialize the fal.ai client.

        Args:
            api_key: fal.ai API key. Defaults to FAL_KEY env var.
            application: fal application id. Defaults to config.video_model.
            negative_prompt: Things the model should avoid.
            guidance_scale: Prompt adherence strength.
        """
        self._api_key = api_key or config.fal_api_key
        if not self._api_key:
            raise ConfigurationError(
                "API Key is not set. Set FAL_KEY env var or add it to your .env file."
            )
        self._application = application or config.video_model
        self._negative_prompt = negative_prompt
        self._guidance_scale = guidance_scale
        self._client = fal_client.SyncClient(key=self._api_key)

    @property
    def application(self) -> str:
        """Return the fal application id."""
        return self._application

    def _on_queue_update(self, update: Any) -> None:
        if isinstance(update, fal_client.InProgress):
            for log in update.logs or []:
                logger.debug(f"[{self._application}] {log.get('message', log)}")

    def generate(self, prompt: str, seed: Optional[int] = None) -> dict:
        """Render a clip from a text prompt.

        Args:
            prompt: Text description of the clip.
            seed: Generation seed. Random if not given.

        Returns:
            The provider's raw result payload.

        Raises:
            ValueError: If the prompt is empty.
            Exception: Whatever the fal client raises on failure.
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt cannot be empty")

        arguments = {
            "prompt": prompt,
            "negative_prompt": self._negative_prompt,
            "guidance_scale": self._guidance_scale,
            "seed": seed if seed is not None else random.randrange(self.MAX_SEED),
        }

        logger.info(f"Sending request to {self._application}")
        logger.debug(f"Prompt: {prompt}")

        result = self._client.subscribe(
            self._application,
            arguments=arguments,
            with_logs=True,
            on_queue_update=self._on_queue_update,
        )
        return result if isinstance(result, dict) else {}
