"""LLM-backed title identification and channel matching."""

from typing import Any, Callable, List, Mapping, Optional, Sequence, Set, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from ...config.models import MatchingConfig
from ...infrastructure.logging import LoggerMixin
from ...utils import ConfigurationError, MediaMatcherError, ProviderError, ValidationError
from ..interfaces import ILLMProvider, ILLMService, ISettingsProvider
from ..models import (
    Batch,
    ChannelMatch,
    ConnectionTestResult,
    IdentificationRequest,
    IdentificationResult,
    MediaType,
    ProviderConfig,
    ProviderType,
    QueryOptions,
)
from ..models.provider import DEFAULT_OLLAMA_MODEL, DEFAULT_OLLAMA_URL
from .batch_orchestrator import BatchOrchestrator
from .confidence_gate import CHANNEL_MATCH_GATE, IDENTIFICATION_GATE
from .llm_providers import MODEL_LIST_TIMEOUT, OllamaProvider, create_provider
from .prompt_builder import PromptBuilder
from .response_parser import ParseFailure, ResponseParser

CONNECTION_TEST_PROMPT = "Reply with exactly: OK"

TRANSLATE_OPTIONS = QueryOptions(temperature=0.1, max_tokens=100)
IDENTIFY_OPTIONS = QueryOptions(temperature=0.1, max_tokens=200)
IDENTIFY_BATCH_OPTIONS = QueryOptions(temperature=0.1, max_tokens=1000, timeout=60)
MATCH_CHANNELS_OPTIONS = QueryOptions(temperature=0.1, max_tokens=2000, timeout=60)
CONNECTION_TEST_OPTIONS = QueryOptions(temperature=0, max_tokens=10, timeout=15)

ProviderFactory = Callable[[ProviderConfig], ILLMProvider]
RequestLike = Union[IdentificationRequest, Mapping[str, Any]]


class LLMService(ILLMService, LoggerMixin):
    """Identification and channel matching through the configured LLM provider.

    Provider settings are read on every call, so configuration changes take
    effect on the next operation. Public operations never raise for expected
    failures: they log and return None or an empty list.
    """

    def __init__(
        self,
        settings: ISettingsProvider,
        matching: Optional[MatchingConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        provider_factory: Optional[ProviderFactory] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        parser: Optional[ResponseParser] = None,
        orchestrator: Optional[BatchOrchestrator] = None,
    ) -> None:
        """Initialize LLM service.

        Args:
            settings: Key-value settings source.
            matching: Batch size limits.
            http_client: Shared HTTP client for provider calls.
            provider_factory: Builds a provider for a configuration snapshot.
            prompt_builder: Prompt renderer.
            parser: Reply parser.
            orchestrator: Batch runner.
        """
        self._settings = settings
        self._matching = matching or MatchingConfig()
        self._http_client = http_client
        self._provider_factory = provider_factory or self._create_provider
        self._prompts = prompt_builder or PromptBuilder(self._matching.max_source_channels)
        self._parser = parser or ResponseParser()
        self._orchestrator = orchestrator or BatchOrchestrator()

    def is_configured(self) -> bool:
        """Check whether a provider is selected and has its credential."""
        return self._provider_config().is_configured

    def get_provider(self) -> str:
        """Get the configured provider name, or ``"none"``."""
        provider = self._settings.get("llmProvider")
        return str(provider) if provider else "none"

    async def query(self, prompt: str, options: Optional[QueryOptions] = None) -> str:
        """Send a raw prompt to the configured provider.

        Args:
            prompt: Prompt text.
            options: Per-request overrides.

        Returns:
            Reply text.

        Raises:
            ConfigurationError: If no provider is configured.
            ProviderError: If the provider call fails.
        """
        config = self._provider_config()
        if not config.is_configured:
            raise ConfigurationError(self._configuration_problem(config))

        provider = self._provider_factory(config)
        return await provider.send(prompt, options)

    async def translate_title(self, title: str, source_language: Optional[str]) -> Optional[str]:
        """Translate a title to its official English title.

        Args:
            title: Title to translate.
            source_language: Language code hint.

        Returns:
            English title, or None if unavailable.
        """
        if not self.is_configured() or not title:
            return None

        prompt = self._prompts.translation(title, source_language)
        try:
            reply = await self.query(prompt, TRANSLATE_OPTIONS)
        except MediaMatcherError as e:
            self.logger.error(f"Title translation failed for '{title}': {e}")
            return None

        translated = self._parser.clean_title(reply)
        if not translated:
            self.logger.warning(f"Title translation for '{title}' returned an empty reply")
            return None

        self.logger.info(f'Translated title: "{title}" -> "{translated}"')
        return translated

    async def identify_media(
        self,
        title: str,
        year: Optional[int] = None,
        media_type: MediaType = MediaType.SERIES,
        source_language: Optional[str] = None,
    ) -> Optional[IdentificationResult]:
        """Identify a single title.

        Args:
            title: Title to identify.
            year: Year hint.
            media_type: Movie or series.
            source_language: Language code hint.

        Returns:
            Identification result, or None if not confidently identified.
        """
        if not self.is_configured() or not title:
            return None

        try:
            request = IdentificationRequest(
                title=title, year=year, media_type=media_type, source_language=source_language
            )
        except PydanticValidationError as e:
            self.logger.warning(f"identify_media: invalid request for '{title}': {e}")
            return None
        prompt = self._prompts.identification(request)

        try:
            reply = await self.query(prompt, IDENTIFY_OPTIONS)
        except MediaMatcherError as e:
            self.logger.error(f"identify_media failed for '{title}': {e}")
            return None

        data = self._parser.extract_object(reply)
        if isinstance(data, ParseFailure):
            return None

        try:
            result = self._build_identification(
                data,
                original_title=title,
                year=self._coerce_year(data.get("year")),
                media_type=request.media_type,
            )
        except ValidationError as e:
            self.logger.debug(f"identify_media: no confident match for '{title}': {e}")
            return None

        self.logger.info(
            f'identify_media: "{title}" -> "{result.english_title}" '
            f"(TMDb: {result.tmdb_type}/{result.tmdb_id}, confidence: {result.confidence:.2f})"
        )
        return result

    async def identify_media_batch(
        self, items: Sequence[RequestLike], source_language: Optional[str] = None
    ) -> List[IdentificationResult]:
        """Identify many titles in bounded batches.

        Args:
            items: Titles to identify.
            source_language: Common language code hint.

        Returns:
            Accepted results from every batch that succeeded, in batch order.
        """
        if not self.is_configured() or not items:
            return []

        requests = self._normalize_requests(items)
        if not requests:
            return []

        async def pipeline(batch: Batch[IdentificationRequest]) -> List[IdentificationResult]:
            prompt = self._prompts.batch_identification(batch.items, source_language)
            reply = await self.query(prompt, IDENTIFY_BATCH_OPTIONS)

            entries = self._parser.extract_array(reply)
            if isinstance(entries, ParseFailure):
                raise entries.to_error()

            results = []
            for entry in entries:
                if not isinstance(entry, dict):
                    continue

                # The model's index, not its position in the array, names the item
                item = batch.item_at(entry.get("index"))
                if item is None:
                    self.logger.debug(f"Dropping entry with unknown index: {entry.get('index')!r}")
                    continue

                try:
                    results.append(
                        self._build_identification(
                            entry,
                            original_title=item.title,
                            year=item.year,
                            media_type=item.media_type,
                        )
                    )
                except ValidationError as e:
                    self.logger.debug(f"Dropping identification for '{item.title}': {e}")
            return results

        results = await self._orchestrator.run(
            requests,
            self._matching.identification_batch_size,
            pipeline,
            label="identify_media_batch",
        )

        self.logger.info(
            f"identify_media_batch: identified {len(results)} of {len(requests)} titles"
        )
        return results

    async def match_channels(
        self, epg_channels: Sequence[str], source_channels: Sequence[str]
    ) -> List[ChannelMatch]:
        """Match EPG channel ids to source channel names.

        Args:
            epg_channels: EPG channel ids.
            source_channels: Source channel names; only the first
                ``max_source_channels`` are shown to the model.

        Returns:
            Accepted matches from every batch that succeeded, in batch order.
        """
        if not self.is_configured() or not epg_channels or not source_channels:
            return []

        epg_ids = list(epg_channels)
        sources = list(source_channels)

        async def pipeline(batch: Batch[str]) -> List[ChannelMatch]:
            prompt = self._prompts.channel_matching(batch.items, sources)
            reply = await self.query(prompt, MATCH_CHANNELS_OPTIONS)

            entries = self._parser.extract_array(reply)
            if isinstance(entries, ParseFailure):
                raise entries.to_error()

            matches = []
            seen: Set[str] = set()
            for entry in entries:
                try:
                    match = self._build_channel_match(entry)
                except ValidationError as e:
                    self.logger.debug(f"Dropping channel match {entry!r}: {e}")
                    continue
                if match.epg_id in seen:
                    continue
                seen.add(match.epg_id)
                matches.append(match)
            return matches

        matches = await self._orchestrator.run(
            epg_ids,
            self._matching.channel_batch_size,
            pipeline,
            label="match_channels",
        )

        self.logger.info(f"Channel matching complete: {len(matches)} matches found")
        return matches

    async def test_connection(self) -> ConnectionTestResult:
        """Send a trivial prompt and check the provider answers ``OK``.

        Returns:
            Connection test result.
        """
        config = self._provider_config()
        if config.provider == ProviderType.NONE:
            return ConnectionTestResult(
                success=False, provider=ProviderType.NONE.value, error="LLM not configured"
            )

        try:
            reply = await self.query(CONNECTION_TEST_PROMPT, CONNECTION_TEST_OPTIONS)
        except MediaMatcherError as e:
            return ConnectionTestResult(
                success=False, provider=config.provider.value, model=config.model, error=str(e)
            )

        return ConnectionTestResult(
            success="ok" in reply.lower(),
            provider=config.provider.value,
            model=config.model,
            response=reply[:50],
        )

    async def get_ollama_models(self) -> List[str]:
        """List model names available on the Ollama server.

        Returns:
            Model names, or an empty list if the server cannot be reached.
        """
        config = ProviderConfig(
            provider=ProviderType.OLLAMA,
            base_url=self._settings.get("ollamaUrl") or DEFAULT_OLLAMA_URL,
            model=self._settings.get("ollamaModel") or DEFAULT_OLLAMA_MODEL,
            timeout=MODEL_LIST_TIMEOUT,
        )

        try:
            return await OllamaProvider(config, self._http_client).list_models()
        except ProviderError as e:
            self.logger.error(f"Failed to get Ollama models from {config.base_url}: {e}")
            return []

    def _provider_config(self) -> ProviderConfig:
        return ProviderConfig.from_settings(self._settings)

    def _create_provider(self, config: ProviderConfig) -> ILLMProvider:
        provider = create_provider(config, self._http_client)
        self.logger.debug(f"Using {config.provider.value} provider with model {config.model}")
        return provider

    @staticmethod
    def _configuration_problem(config: ProviderConfig) -> str:
        if config.provider == ProviderType.OPENAI:
            return "OpenAI API key not configured"
        if config.provider == ProviderType.OLLAMA:
            return "Ollama URL not configured"
        return "LLM not configured"

    def _normalize_requests(self, items: Sequence[RequestLike]) -> List[IdentificationRequest]:
        requests = []
        for item in items:
            if isinstance(item, IdentificationRequest):
                requests.append(item)
                continue
            try:
                requests.append(IdentificationRequest.model_validate(item))
            except PydanticValidationError as e:
                self.logger.warning(f"Skipping invalid identification item {item!r}: {e}")
        return requests

    def _build_identification(
        self,
        entry: Mapping[str, Any],
        original_title: str,
        year: Optional[int],
        media_type: Optional[MediaType],
    ) -> IdentificationResult:
        """Validate one identification entry from the model.

        Raises:
            ValidationError: If the entry is unusable or below the confidence gate.
        """
        english_title = entry.get("englishTitle")
        if not isinstance(english_title, str) or not english_title.strip():
            raise ValidationError("missing englishTitle")

        confidence = entry.get("confidence")
        if not IDENTIFICATION_GATE.accept(confidence):
            raise ValidationError(f"confidence {confidence!r} rejected by {IDENTIFICATION_GATE!r}")

        tmdb_type, tmdb_id = self._parser.parse_tmdb_reference(entry.get("tmdbId"))

        return IdentificationResult(
            original_title=original_title,
            english_title=english_title.strip(),
            tmdb_id=tmdb_id,
            tmdb_type=tmdb_type,
            year=year,
            media_type=media_type,
            confidence=float(confidence),  # type: ignore[arg-type]
        )

    def _build_channel_match(self, entry: object) -> ChannelMatch:
        """Validate one channel match entry from the model.

        Raises:
            ValidationError: If the entry is unusable or below the confidence gate.
        """
        if not isinstance(entry, dict):
            raise ValidationError("entry is not an object")

        epg_id = entry.get("epg")
        source_name = entry.get("source")
        if not isinstance(epg_id, str) or not epg_id.strip():
            raise ValidationError("missing epg")
        if not isinstance(source_name, str) or not source_name.strip():
            raise ValidationError("missing source")

        confidence = entry.get("confidence")
        if not CHANNEL_MATCH_GATE.accept(confidence):
            raise ValidationError(f"confidence {confidence!r} rejected by {CHANNEL_MATCH_GATE!r}")

        return ChannelMatch(
            epg_id=epg_id.strip(),
            source_name=source_name.strip(),
            confidence=float(confidence),  # type: ignore[arg-type]
        )

    @staticmethod
    def _coerce_year(value: object) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None
