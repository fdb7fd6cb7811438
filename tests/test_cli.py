"""
Tests for the command line entry point.
"""

from unittest.mock import patch

import httpx

from conftest import LISTING, mock_client
from gitdir_probe import cli

PNG = b"\x89PNG\r\n\x1a\nfake"


def handler(request):
    if request.url.host == "good.example":
        return httpx.Response(200, content=LISTING)
    return httpx.Response(404)


class FakeRenderer:
    def __init__(self, timeout=None, viewport=None):
        self.timeout = timeout

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None

    async def render(self, url):
        return PNG


class TestMain:

    def test_missing_argument_prints_usage(self, capsys):
        assert cli.main([]) == 0
        assert "Usage: gitdir-probe" in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "nope.txt")]) == 0
        assert "Error opening file" in capsys.readouterr().out

    def test_unwritable_output(self, tmp_path, capsys, fast_config):
        domains = tmp_path / "domains.txt"
        domains.write_text("https://good.example\n")

        with patch("gitdir_probe.pool.make_client", lambda config: mock_client(handler)):
            code = cli.main([str(domains), "--output", str(tmp_path / "no" / "out.txt")], config=fast_config)

        assert code == 0
        out = capsys.readouterr().out
        assert "Error writing results" in out
        assert "[OK]" not in out

    def test_append_mode(self, tmp_path, capsys, fast_config):
        domains = tmp_path / "domains.txt"
        domains.write_text("https://good.example\n\nhttps://bad.example\n")
        output = tmp_path / "found.txt"

        with patch("gitdir_probe.pool.make_client", lambda config: mock_client(handler)):
            code = cli.main([str(domains), "--output", str(output)], config=fast_config)

        assert code == 0
        assert output.read_text() == "https://good.example\n"
        out = capsys.readouterr().out
        assert out.count("[MATCH]") == 1
        assert out.count("[FAIL]") == 1
        assert "1 of 2 domains exposed" in out

    def test_screenshot_mode_with_report(self, tmp_path, capsys, fast_config):
        domains = tmp_path / "domains.txt"
        domains.write_text("https://good.example\nhttps://bad.example\n")
        screens = tmp_path / "screens"

        with patch("gitdir_probe.pool.make_client", lambda config: mock_client(handler)), \
                patch("gitdir_probe.cli.PlaywrightRenderer", FakeRenderer):
            code = cli.main([str(domains), "--screenshots", "--output", str(screens), "--report"],
                            config=fast_config)

        assert code == 0
        assert (screens / "https_good.example.png").read_bytes() == PNG
        assert not (screens / "https_bad.example.png").exists()
        assert (screens / "report.html").exists()
        assert (screens / "results.xlsx").exists()
        assert "1 screenshots saved" in capsys.readouterr().out


class TestReadDomains:

    def test_keeps_every_non_blank_line(self, tmp_path):
        path = tmp_path / "domains.txt"
        path.write_text("#https://odd.example\n https://a.example \n\nhttps://b.example\n")

        assert cli.read_domains(path) == ["#https://odd.example", "https://a.example", "https://b.example"]
