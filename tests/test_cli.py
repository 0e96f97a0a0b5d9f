import logging

import pytest
import requests

import pngme
from pngme.cli import main


def test_encode_decode(png_file, capsys):
    assert main(['encode', str(png_file), 'ruSt', 'This is a secret message!']) == 0
    png = pngme.open(str(png_file))
    assert png.chunks[-1].type == 'ruSt'

    assert main(['decode', str(png_file), 'ruSt']) == 0
    assert capsys.readouterr().out == 'This is a secret message!\n'


def test_encode_to_output(png_file, png_bytes, tmp_path):
    output = tmp_path / 'out.png'
    assert main(['encode', str(png_file), 'ruSt', 'hidden', '-o', str(output)]) == 0
    assert png_file.read_bytes() == png_bytes
    assert pngme.open(str(output)).chunk_by_type('ruSt').data == b'hidden'


def test_encode_invalid_type(png_file, png_bytes, caplog):
    assert main(['encode', str(png_file), 'ru5t', 'hidden']) == 1
    assert png_file.read_bytes() == png_bytes
    assert 'ru5t' in caplog.text


def test_decode_missing_chunk(png_file, caplog):
    with caplog.at_level(logging.ERROR):
        assert main(['decode', str(png_file), 'ruSt']) == 1
    assert 'No ruSt chunk' in caplog.text


def test_remove(png_file):
    main(['encode', str(png_file), 'ruSt', 'first'])
    main(['encode', str(png_file), 'ruSt', 'second'])
    assert main(['remove', str(png_file), 'ruSt']) == 0
    png = pngme.open(str(png_file))
    assert [c.data for c in png.get_chunks_by_type('ruSt')] == [b'second']


def test_remove_missing_chunk(png_file, png_bytes, caplog):
    assert main(['remove', str(png_file), 'ruSt']) == 1
    assert png_file.read_bytes() == png_bytes
    assert 'ruSt' in caplog.text


def test_print(png_file, capsys):
    assert main(['print', str(png_file)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith('[00] IHDR length=13')
    assert lines[2].startswith('[02] IEND length=0')


def test_not_a_png(tmp_path, caplog):
    path = tmp_path / 'text.txt'
    path.write_bytes(b'hello')
    assert main(['print', str(path)]) == 1
    assert 'missing PNG signature' in caplog.text


def test_missing_file(tmp_path):
    assert main(['print', str(tmp_path / 'nothing.png')]) == 1


def test_no_command():
    with pytest.raises(SystemExit):
        main([])


@pytest.fixture
def served_png(monkeypatch, png_bytes):
    class Response:
        content = png_bytes

        def raise_for_status(self):
            pass

    monkeypatch.setattr(requests, 'get', lambda url: Response())


@pytest.mark.parametrize('command', [
    ['encode', 'https://example.com/a.png', 'ruSt', 'hi'],
    ['remove', 'http://example.com/a.png', 'IEND'],
])
def test_url_without_output(served_png, capsys, command):
    with pytest.raises(SystemExit) as info:
        main(command)
    assert info.value.code == 2
    assert '--output is required' in capsys.readouterr().err


def test_encode_url_to_output(served_png, tmp_path):
    output = tmp_path / 'out.png'
    assert main(['encode', 'https://example.com/a.png', 'ruSt', 'hi', '-o', str(output)]) == 0
    assert pngme.open(str(output)).chunk_by_type('ruSt').data_as_string() == 'hi'


def test_print_url(served_png, capsys):
    assert main(['print', 'https://example.com/a.png']) == 0
    assert 'IHDR' in capsys.readouterr().out
