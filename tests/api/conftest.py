"""Fixtures for API tests against a seeded temporary database."""

import asyncio
from collections.abc import Callable, Generator

import aiosqlite
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from smartsearch.api.main import create_app
from smartsearch.application.services import reset_services
from smartsearch.config import get_settings, reset_settings
from smartsearch.infrastructure.storage.sqlite.migrations import run_migrations
from smartsearch.infrastructure.topics import reset_topic_model

SEED_ROWS = {
    "actualities": [
        {
            "slug": "securite-en-ligne",
            "title_fr": "Sécurité en ligne",
            "title_ar": "الأمان على الإنترنت",
            "mini_summary_fr": "Nouvelle campagne nationale pour les familles",
            "image_name": "campagne.png",
        },
    ],
    "guides": [
        {
            "slug": "guide-parents",
            "profile": "parent",
            "name_fr": "Guide des parents",
            "description_fr": "Proteger les enfants face au harcelement en ligne",
        },
        {
            "slug": "guide-jeunes",
            "profile": "youth",
            "name_fr": "Guide des jeunes",
            "description_fr": "Reagir au harcelement sur les reseaux sociaux",
        },
    ],
    "articles": [
        {
            "slug": "mots-de-passe",
            "tuile_title_fr": "Mots de passe solides",
            "tuile_text_fr": "Choisir un mot de passe pour chaque compte",
        },
    ],
}


async def _seed() -> None:
    db_path = get_settings().storage.db_path
    await run_migrations(db_path)
    async with aiosqlite.connect(db_path) as conn:
        for table, rows in SEED_ROWS.items():
            for row in rows:
                columns = ", ".join(row)
                marks = ", ".join("?" for _ in row)
                await conn.execute(
                    f"INSERT INTO {table} ({columns}) VALUES ({marks})",
                    tuple(row.values()),
                )
        await conn.commit()


@pytest.fixture
def app_factory(monkeypatch: pytest.MonkeyPatch) -> Callable[..., FastAPI]:
    """Build a fresh app after applying environment overrides."""

    def _create(**env: str) -> FastAPI:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        reset_settings()
        reset_services()
        reset_topic_model()
        asyncio.run(_seed())
        return create_app()

    yield _create
    reset_services()
    reset_topic_model()


@pytest.fixture
def client(app_factory) -> Generator[TestClient, None, None]:
    """Test client with admission control disabled."""
    with TestClient(app_factory(ADMISSION_ENABLED="false")) as client:
        yield client


@pytest.fixture
def api_prefix() -> str:
    return "/api"
