"""
Pytest configuration shared across unit and integration tests

Provides temporary directory layouts, a sample front-end source tree and an
API client bound to them.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from forsaj.config import Settings
from forsaj.observability import telemetry

HERO_TSX = """\
import React from 'react';
import { useSiteContent } from '../hooks/useSiteContent';

// Landing banner
const Hero: React.FC = () => {
  const { getText, getImage } = useSiteContent('hero');
  return (
    <section className="hero" style={{ backgroundImage: 'url(/bg.png)' }}>
      <img src="/images/hero.jpg" alt="Forsaj yarışı" />
      <h1>{getText('hero-title', 'Offroad Çempionatı')}</h1>
      <p>Azərbaycanın ən sürətli yarışları</p>
      <img src={getImage('hero-logo', '/images/logo.png')} />
      <button>Qeydiyyat</button>
    </section>
  );
};

export default Hero;
"""

FOOTER_TSX = """\
import React from 'react';

const Footer = () => {
  const links = [{ label: 'Haqqımızda', href: '/about' }];
  return (
    <footer>
      {/* copyright block */}
      <p>Bütün hüquqlar qorunur</p>
      <input placeholder="E-poçt ünvanınız" />
    </footer>
  );
};

export default Footer;
"""

EMPTY_TSX = """\
import React from 'react';

export const Spacer = () => <div className="h-4" />;
"""

APP_TSX = """\
import React from 'react';
import Hero from './components/Hero';

const App = () => <main><Hero /></main>;

export default App;
"""


@pytest.fixture(autouse=True)
def reset_telemetry():
    telemetry.reset()
    yield
    telemetry.reset()


@pytest.fixture
def front_dir(tmp_path: Path) -> Path:
    """A small front-end tree: two content components, one empty, plus App.tsx."""
    front = tmp_path / "front"
    components = front / "components"
    components.mkdir(parents=True)
    (components / "Hero.tsx").write_text(HERO_TSX, encoding="utf-8")
    (components / "Footer.tsx").write_text(FOOTER_TSX, encoding="utf-8")
    (components / "Spacer.tsx").write_text(EMPTY_TSX, encoding="utf-8")
    (components / "notes.md").write_text("# Not a component", encoding="utf-8")
    (front / "App.tsx").write_text(APP_TSX, encoding="utf-8")
    return front


@pytest.fixture
def settings(tmp_path: Path, front_dir: Path) -> Settings:
    data_dir = front_dir / "public"
    return Settings(
        data_dir=data_dir,
        upload_dir=data_dir / "uploads",
        admin_dir=tmp_path / "admin",
        front_dir=front_dir,
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    from forsaj.api.app import create_app

    return TestClient(create_app(settings))


@pytest.fixture
def secured_settings(settings: Settings) -> Settings:
    settings.admin_api_key = "test-admin-key"
    return settings


@pytest.fixture
def secured_client(secured_settings: Settings) -> TestClient:
    from forsaj.api.app import create_app

    return TestClient(create_app(secured_settings))
