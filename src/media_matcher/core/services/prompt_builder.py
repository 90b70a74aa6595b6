"""Prompt templates for identification and channel matching."""

import json
from typing import Optional, Sequence

from ...utils import resolve_language_name
from ..models import IdentificationRequest, MediaType

DEFAULT_MAX_SOURCE_CHANNELS = 100


class PromptBuilder:
    """Renders task prompts with explicit output contracts."""

    def __init__(self, max_source_channels: int = DEFAULT_MAX_SOURCE_CHANNELS) -> None:
        """Initialize prompt builder.

        Args:
            max_source_channels: Number of source channel names shown to the model.
        """
        self.max_source_channels = max_source_channels

    def translation(self, title: str, source_language: Optional[str]) -> str:
        """Create prompt asking for the official English title.

        Args:
            title: Title to translate.
            source_language: Language code hint.

        Returns:
            Prompt text.
        """
        language = resolve_language_name(source_language, "non-English")

        return f"""You are a movie and TV title translator who knows the official English titles of international releases.

Given this {language} movie or TV show title: "{title}"

Reply with ONLY the official English title as listed on TMDB/IMDb.
If the title is already English or you are not sure, reply with the original title exactly as given.
Do not add explanations, quotes or any other text. Just the title."""

    def identification(self, request: IdentificationRequest) -> str:
        """Create prompt identifying a single title.

        Args:
            request: Title to identify.

        Returns:
            Prompt text.
        """
        type_hint = "movie" if request.media_type == MediaType.MOVIE else "TV series/show"
        year_hint = f" ({request.year})" if request.year else ""

        prompt_parts = [
            "You are a movie and TV show identification expert with comprehensive "
            "knowledge of international titles.",
            "",
            f'Identify this {type_hint}: "{request.title}"{year_hint}',
        ]
        if request.source_language:
            language = resolve_language_name(request.source_language, "unknown")
            prompt_parts.append(f"The title appears to be in {language}.")

        prompt_parts.append(
            """
The title may be:
1. A localized or dubbed title of a production from another country
2. A translated title
3. The original title with extra tags such as "(JP)" or "(Ger Sub)"
4. An anime or foreign production that keeps its original title
5. A reboot or remake whose year differs from the one in the title

Keep in mind:
- A year in the title may be wrong or belong to a different version.
- Anime titles such as "07-Ghost" or "Death Note" are the original anime, not Western shows with similar names.
- Tags like "(JP)", "(Ger Sub)" or "(Eng Dub)" describe audio or subtitles, not a different show.

Identify the ORIGINAL production and respond ONLY with a single JSON object in exactly this format:
{"englishTitle": "Original Title", "tmdbId": "tv/12345", "year": 2009, "confidence": 0.95}

Rules:
- englishTitle: the original title as listed on TMDB/IMDb, or null if unknown
- tmdbId: "tv/NUMBER" for TV shows or "movie/NUMBER" for movies, or null if unknown
- year: original release year as an integer, or null if unknown
- confidence: number from 0.0 to 1.0 (0.95+ certain, 0.8-0.94 likely, 0.6-0.79 possible, below 0.6 uncertain)
- If you cannot identify it, return {"englishTitle": null, "tmdbId": null, "year": null, "confidence": 0}
- Do NOT guess or invent TMDB ids. Only provide one if you are certain."""
        )

        return "\n".join(prompt_parts)

    def batch_identification(
        self, items: Sequence[IdentificationRequest], source_language: Optional[str]
    ) -> str:
        """Create prompt identifying a numbered list of titles.

        Args:
            items: Titles in this batch; numbered from 1 in order.
            source_language: Common language code hint.

        Returns:
            Prompt text.
        """
        language = resolve_language_name(source_language, "unknown")

        item_lines = []
        for number, item in enumerate(items, start=1):
            year_hint = f" ({item.year})" if item.year else ""
            type_hint = "movie" if item.media_type == MediaType.MOVIE else "series"
            item_lines.append(f'{number}. "{item.title}"{year_hint} [{type_hint}]')
        item_list = "\n".join(item_lines)

        return f"""You are a movie and TV show identification expert with comprehensive knowledge of international titles.

Identify these {language} titles and find their original English names:

{item_list}

For each title, identify the original production it represents.
Note:
- Some titles are localized or dubbed versions of English productions
- Anime titles (like "07-Ghost" or "Death Note") are the original anime
- Tags like "(JP)" or "(Ger Sub)" describe audio or subtitle options, not different shows
- If a title is already in its original form, keep it as-is

Respond ONLY with a JSON array. Each element is an object with:
- index: the number of the title in the list above (1-based integer)
- englishTitle: the original English title (or the same title if already English)
- tmdbId: "tv/NUMBER" or "movie/NUMBER", or null if unknown
- confidence: number from 0.0 to 1.0 (only include entries with confidence >= 0.6)

Example:
[{{"index": 1, "englishTitle": "Original Title", "tmdbId": "tv/12345", "confidence": 0.95}}]

Only include titles you can confidently identify and omit uncertain ones.
Do NOT guess TMDB ids. Use null unless you are certain.
Return [] if you cannot identify any title."""

    def channel_matching(self, epg_ids: Sequence[str], source_channels: Sequence[str]) -> str:
        """Create prompt matching EPG ids to source channel names.

        Only the first ``max_source_channels`` source names are included.

        Args:
            epg_ids: EPG channel ids in this batch.
            source_channels: All source channel names.

        Returns:
            Prompt text.
        """
        shown_sources = list(source_channels[: self.max_source_channels])

        return f"""You are a TV channel matching expert. Match EPG channel IDs to IPTV source channel names.

EPG channel IDs (from the TV guide):
{json.dumps(list(epg_ids), ensure_ascii=False)}

Available IPTV source channel names:
{json.dumps(shown_sources, ensure_ascii=False)}

For each EPG channel, find the best matching source channel name.
Matching rules:
- Ignore HD/SD/FHD/4K suffixes when comparing names
- Country suffixes (.de, .uk, etc.) indicate the channel's region
- Different spellings of the same brand are the same channel (e.g. "rtl2.de" matches "RTL Zwei", "RTL 2", "RTL II")

Respond ONLY with a JSON array of matches in exactly this format:
[{{"epg": "epg_channel_id", "source": "source_channel_name", "confidence": 0.95}}]

Rules:
- Only include matches with confidence > 0.7
- confidence is a number from 0.0 to 1.0 (0.7 possible, 0.85 likely, 0.95+ certain)
- Include each EPG channel at most once
- If no good match exists for a channel, leave it out
- Return [] if there are no matches"""
