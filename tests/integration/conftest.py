"""Integration test fixtures and configuration."""

import json
import re

import httpx
import pytest
import yaml

from media_matcher.config import ConfigManager
from media_matcher.core.interfaces import ILLMService, ISettingsProvider
from media_matcher.core.services import LLMService
from media_matcher.infrastructure import Container

KNOWN_TITLES = {
    "Der Untergang": ("Downfall", "movie/613", 0.97),
    "Das Boot": ("Das Boot", "movie/387", 0.96),
    "Haus des Geldes": ("Money Heist", "tv/71446", 0.93),
    "Zurück in die Vergangenheit": ("Quantum Leap", "tv/4018", 0.9),
    "Die Simpsons": ("The Simpsons", "tv/456", 0.98),
}

KNOWN_CHANNELS = {
    "rtl2.de": ("RTL Zwei HD", 0.95),
    "prosieben.de": ("ProSieben FHD", 0.92),
    "sat1.de": ("SAT.1", 0.72),
    "kabeleins.de": ("Kabel 1", 0.6),
}


class FakeOpenAIServer:
    """Chat-completion endpoint answering from fixed lookup tables."""

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)

        if request.headers.get("Authorization") != "Bearer sk-integration":
            return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

        prompt = body["messages"][0]["content"]
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": self.answer(prompt)}}]}
        )

    def answer(self, prompt: str) -> str:
        if prompt.startswith("Reply with exactly"):
            return "OK"
        if "channel matching expert" in prompt:
            return self._match_channels(prompt)
        if "Identify these" in prompt:
            return self._identify_batch(prompt)
        if "Identify this" in prompt:
            return self._identify(prompt)
        return self._translate(prompt)

    def _translate(self, prompt: str) -> str:
        title = re.search(r'title: "([^"]+)"', prompt).group(1)
        known = KNOWN_TITLES.get(title)
        return f'"{known[0]}"' if known else title

    def _identify(self, prompt: str) -> str:
        title = re.search(r'Identify this [^:]+: "([^"]+)"', prompt).group(1)
        known = KNOWN_TITLES.get(title)
        if known is None:
            return '{"englishTitle": null, "tmdbId": null, "year": null, "confidence": 0}'
        english, tmdb_id, confidence = known
        return "Here is the result:\n" + json.dumps(
            {"englishTitle": english, "tmdbId": tmdb_id, "year": None, "confidence": confidence}
        )

    def _identify_batch(self, prompt: str) -> str:
        entries = []
        for number, title in re.findall(r'^(\d+)\. "([^"]+)"', prompt, re.MULTILINE):
            known = KNOWN_TITLES.get(title)
            if known:
                english, tmdb_id, confidence = known
                entries.append(
                    {
                        "index": int(number),
                        "englishTitle": english,
                        "tmdbId": tmdb_id,
                        "confidence": confidence,
                    }
                )
        return "```json\n" + json.dumps(entries) + "\n```"

    def _match_channels(self, prompt: str) -> str:
        epg_ids = json.loads(re.search(r"TV guide\):\n(\[.*\])", prompt).group(1))
        matches = [
            {"epg": epg_id, "source": KNOWN_CHANNELS[epg_id][0], "confidence": KNOWN_CHANNELS[epg_id][1]}
            for epg_id in epg_ids
            if epg_id in KNOWN_CHANNELS
        ]
        return json.dumps(matches)


@pytest.fixture
def integration_config(tmp_path):
    """Create integration test configuration."""
    config_content = {
        "llm": {
            "provider": "openai",
            "openai": {
                "api_key": "sk-integration",
                "model": "gpt-4o-mini",
                "base_url": "https://llm.test/v1",
                "timeout": 30,
            },
            "ollama": {"url": "http://ollama.test:11434", "model": "llama3.2"},
        },
        "matching": {
            "identification_batch_size": 2,
            "channel_batch_size": 2,
            "max_source_channels": 100,
        },
        "logging": {"level": "DEBUG"},
    }

    config_file = tmp_path / "integration_config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_content, f, default_flow_style=False, indent=2)

    return config_file


@pytest.fixture
def fake_server():
    return FakeOpenAIServer()


@pytest.fixture
def integration_config_manager(integration_config):
    return ConfigManager(integration_config)


@pytest.fixture
def integration_container(integration_config_manager, fake_server):
    """Create container whose LLM service talks to the fake server."""
    container = Container(integration_config_manager)
    container.configure_default_services()

    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_server))
    # Route provider calls through the mock transport
    container.register_factory(
        ILLMService,
        lambda: LLMService(
            settings=container.get(ISettingsProvider),
            matching=integration_config_manager.get_config().matching,
            http_client=client,
        ),
    )
    return container
