"""Tests for the ppm-tool CLI: registry, commands and main()."""

import json
from pathlib import Path

import pytest
from PIL import Image
from ppm_tool.__main__ import main
from ppm_tool.commands.cat import RESET, bg, fg, render
from ppm_tool.commands.info import build_report
from ppm_tool.core.decoder import decode, decode_file
from ppm_tool.core.encoder import encode
from ppm_tool.core.grid import PixelGrid
from ppm_tool.core.types import Color
from ppm_tool.registry import discover, get

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from a directory with a .git marker so no outside .env is loaded."""
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('PPM_TOOL_GLYPH', raising=False)
    monkeypatch.delenv('PPM_TOOL_CENSUS_TOP', raising=False)
    return tmp_path


@pytest.fixture
def sample_ppm(isolated: Path) -> Path:
    grid = PixelGrid(2, 3)
    grid.set_pixel(0, 0, RED)
    grid.set_pixel(1, 1, BLUE)
    path = isolated / 'sample.ppm'
    path.write_bytes(encode(grid))
    return path


class TestRegistry:
    def test_discovers_commands(self):
        assert {'cat', 'info', 'convert'} <= set(discover())

    def test_every_command_module_registered(self):
        import ppm_tool.commands as pkg

        modules = {p.stem for p in Path(pkg.__path__[0]).glob('*.py') if not p.stem.startswith('_')}
        assert modules == set(discover())

    def test_unknown_command(self):
        with pytest.raises(KeyError):
            get('nope')


class TestRender:
    def test_escape_codes(self):
        assert fg(Color(1, 2, 3)) == '\x1b[38;2;1;2;3m'
        assert bg(Color(4, 5, 6)) == '\x1b[48;2;4;5;6m'

    def test_two_rows_one_line(self):
        grid = PixelGrid(1, 2)
        grid.set_pixel(0, 0, RED)
        grid.set_pixel(0, 1, BLUE)
        assert render(grid) == bg(BLUE) + fg(RED) + '▀' + RESET

    def test_odd_height_last_line_has_no_background(self):
        grid = PixelGrid(2, 3)
        lines = render(grid).split('\n')
        assert len(lines) == 2
        black = Color()
        assert lines[1] == fg(black) + '▀' + fg(black) + '▀' + RESET

    def test_custom_glyph(self):
        assert render(PixelGrid(1, 1), glyph='#').endswith('#' + RESET)

    def test_empty(self):
        assert render(PixelGrid(0, 0)) == ''
        assert render(PixelGrid(0, 2)) == RESET


class TestCatCommand:
    def test_prints_image(self, sample_ppm: Path, capsys: pytest.CaptureFixture[str]):
        assert main(['cat', str(sample_ppm)]) == 0
        out = capsys.readouterr().out
        assert out == render(decode_file(sample_ppm)) + '\n'

    def test_glyph_from_env(self, sample_ppm: Path, monkeypatch, capsys):
        monkeypatch.setenv('PPM_TOOL_GLYPH', '@')
        main(['cat', str(sample_ppm)])
        assert '@' in capsys.readouterr().out

    def test_glyph_from_env_file(self, isolated: Path, sample_ppm: Path, monkeypatch, capsys):
        monkeypatch.setenv('PPM_TOOL_GLYPH', '')
        monkeypatch.delenv('PPM_TOOL_GLYPH')
        (isolated / '.env').write_text('PPM_TOOL_GLYPH=%\n')
        main(['cat', str(sample_ppm)])
        captured = capsys.readouterr()
        assert '%' in captured.out
        assert 'loaded' in captured.err

    def test_missing_file(self, isolated: Path, capsys):
        assert main(['cat', str(isolated / 'nope.ppm')]) == 1
        assert "File doesn't exist!" in capsys.readouterr().err

    def test_bad_signature(self, isolated: Path, capsys):
        path = isolated / 'p3.ppm'
        path.write_bytes(b'P3\n1 1\n255\n0 0 0\n')
        assert main(['cat', str(path)]) == 1
        assert 'Unable to parse image! Cause: Invalid signature!' in capsys.readouterr().err


class TestInfoCommand:
    def test_build_report_with_comments(self):
        data = b'# made by hand\nP6\n2 1\n# depth\n15\n\x01\x02\x03'
        report = build_report('x.ppm', data, top=5)
        assert (report.width, report.height, report.color_depth) == (2, 1, 15)
        assert report.header_size == len(data) - 3
        assert report.decoded_pixels == 1
        assert report.truncated

    def test_text(self, sample_ppm: Path, capsys):
        assert main(['info', str(sample_ppm)]) == 0
        out = capsys.readouterr().out
        assert 'sample.ppm (2×3)' in out
        assert '18/18 bytes' in out

    def test_json(self, sample_ppm: Path, capsys):
        assert main(['info', str(sample_ppm), '--json']) == 0
        obj = json.loads(capsys.readouterr().out)
        assert obj['dimensions'] == {'width': 2, 'height': 3}
        assert obj['header_size'] == len(b'P6\n2 3\n255\n')
        assert obj['body']['truncated'] is False
        assert obj['census'][0]['hex'] == '#000000'
        assert len(obj['census']) == 3

    def test_census_top_from_env(self, sample_ppm: Path, monkeypatch, capsys):
        monkeypatch.setenv('PPM_TOOL_CENSUS_TOP', '1')
        main(['info', str(sample_ppm), '--json'])
        assert len(json.loads(capsys.readouterr().out)['census']) == 1

    def test_truncated(self, isolated: Path, capsys):
        path = isolated / 'short.ppm'
        path.write_bytes(b'P6\n2 2\n255\n\x01\x02\x03\x04')
        assert main(['info', str(path), '--json']) == 0
        body = json.loads(capsys.readouterr().out)['body']
        assert body['truncated'] is True
        assert body['decoded_pixels'] == 1

    def test_malformed_header(self, isolated: Path, capsys):
        path = isolated / 'bad.ppm'
        path.write_bytes(b'P6\nwide tall\n255\n')
        assert main(['info', str(path)]) == 1
        assert 'Invalid file format!' in capsys.readouterr().err


class TestConvertCommand:
    def test_png_to_ppm(self, isolated: Path):
        img = Image.new('RGB', (3, 2), (1, 2, 3))
        img.putpixel((2, 1), (250, 128, 7))
        src = isolated / 'in.png'
        img.save(src)
        dst = isolated / 'out.ppm'
        assert main(['convert', str(src), str(dst)]) == 0
        grid = decode(dst.read_bytes())
        assert (grid.width, grid.height) == (3, 2)
        assert grid.pixel_at(0, 0) == Color(1, 2, 3)
        assert grid.pixel_at(2, 1) == Color(250, 128, 7)

    def test_ppm_to_png(self, sample_ppm: Path):
        dst = sample_ppm.with_suffix('.png')
        assert main(['convert', str(sample_ppm), str(dst)]) == 0
        with Image.open(dst) as img:
            assert img.size == (2, 3)
            assert img.convert('RGB').getpixel((1, 1)) == (0, 0, 255)

    def test_ppm_to_ppm(self, sample_ppm: Path):
        dst = sample_ppm.with_name('copy.ppm')
        assert main(['convert', str(sample_ppm), str(dst)]) == 0
        assert dst.read_bytes() == sample_ppm.read_bytes()

    def test_neither_side_ppm(self, isolated: Path, capsys):
        src = isolated / 'a.png'
        Image.new('RGB', (1, 1)).save(src)
        assert main(['convert', str(src), str(isolated / 'b.png')]) == 1
        assert 'must be a .ppm file' in capsys.readouterr().err

    def test_unwritable_destination(self, sample_ppm: Path, capsys):
        dst = sample_ppm.parent / 'missing-dir' / 'out.ppm'
        assert main(['convert', str(sample_ppm), str(dst)]) == 1
        err = capsys.readouterr().err
        assert 'Error: I/O error!' in err
        assert 'Unable to parse image!' not in err

    def test_missing_source(self, isolated: Path, capsys):
        assert main(['convert', str(isolated / 'none.png'), str(isolated / 'x.ppm')]) == 1


class TestHelp:
    def test_lists_commands(self, isolated: Path, capsys):
        assert main(['help']) == 0
        out = capsys.readouterr().out
        for name in ('cat', 'info', 'convert'):
            assert name in out

    def test_command_docs(self, isolated: Path, capsys):
        assert main(['help', 'cat']) == 0
        assert 'half-block' in capsys.readouterr().out

    def test_unknown(self, isolated: Path, capsys):
        assert main(['help', 'nope']) == 1

    def test_no_command(self, isolated: Path, capsys):
        assert main([]) == 1
