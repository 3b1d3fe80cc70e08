from pathlib import Path

import pytest

from howtohelp import main as entrypoint
from howtohelp.config import CMSConfig, Settings


def test_parse_args_defaults_to_serve():
    args = entrypoint.parse_args([])
    assert args.command == "serve"
    assert args.port is None


def test_parse_args_sitemap_output():
    args = entrypoint.parse_args(["--log-level", "DEBUG", "sitemap", "--output", "out/sitemap.xml"])
    assert args.command == "sitemap"
    assert args.output == Path("out/sitemap.xml")
    assert args.log_level == "DEBUG"


@pytest.mark.asyncio
async def test_write_sitemap_without_cms(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = Settings(cms=CMSConfig(base_url=""))
    output = tmp_path / "public" / "sitemap.xml"

    assert await entrypoint.write_sitemap(settings, output) == 0

    xml = output.read_text(encoding="utf-8")
    assert "<loc>https://howtohelp.in</loc>" in xml
    assert "<loc>https://howtohelp.in/categories</loc>" in xml
