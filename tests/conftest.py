"""Configuration for pytest.

This file contains fixtures and configurations used by pytest.
"""
import logging
import random

import pytest

from roleplay_simulator.models import (
    AppSettings,
    Difficulty,
    Identity,
    IdentitySettings,
    PersonaType,
    Scenario,
)


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def persona_types() -> tuple[PersonaType, ...]:
    return (
        PersonaType(id="calm", name="Kooperatif", description="Sabar dan to the point.", difficulty=Difficulty.EASY),
        PersonaType(id="angry", name="Ngeyel", description="Banyak tanda seru, minta solusi sekarang.",
                    difficulty=Difficulty.MEDIUM),
        PersonaType(id="lost", name="Gaptek", description="Bingung istilah teknis.", difficulty=Difficulty.HARD),
    )


@pytest.fixture
def scenarios() -> tuple[Scenario, ...]:
    return (
        Scenario(id="login", category="Teknis", title="Gagal login", description="Tidak bisa login ke aplikasi.",
                 images=("img-login-0", "img-login-1")),
        Scenario(id="transfer", category="Transaksi", title="Transfer gagal", description="Saldo terpotong.",
                 script="Saya sudah transfer tapi belum masuk.", images=("img-transfer-0",)),
        Scenario(id="collector", category="Perilaku", title="Penagih kasar", description="Diancam penagih."),
        Scenario(id="inactive", category="Lainnya", title="Tidak aktif", description="Tidak dipakai.",
                 is_active=False),
    )


@pytest.fixture
def settings(scenarios: tuple[Scenario, ...], persona_types: tuple[PersonaType, ...]) -> AppSettings:
    return AppSettings(scenarios=scenarios, persona_types=persona_types, identity_settings=IdentitySettings())


@pytest.fixture
def fixed_identity() -> Identity:
    return Identity(name="Tono Fixed", phone="081111111111", city="Bogor")
