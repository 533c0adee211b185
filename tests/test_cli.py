import builtins

import pytest

from tictactoe.cli import build_parser, main, print_board


def scripted_input(monkeypatch, answers):
    answers = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError
    monkeypatch.setattr(builtins, "input", fake_input)


def test_print_board(capsys):
    print_board(["X", None, "O", None, "X", None, None, None, None], 3)
    out = capsys.readouterr().out.splitlines()
    assert out[0] == " X | 1 | O"
    assert len(out) == 5


def test_pvp_game(monkeypatch, capsys):
    scripted_input(monkeypatch, ["abc", "0", "0", "3", "1", "4", "2"])
    assert main(["play", "--pvp", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Enter a cell number" in out
    assert "Invalid move" in out
    assert "wins!" in out
    assert "Line: [0, 1, 2]" in out


def test_aborted_game(monkeypatch, capsys):
    scripted_input(monkeypatch, [])
    assert main(["play", "--pvp"]) == 1
    assert "Game aborted" in capsys.readouterr().out


def test_arena(capsys):
    assert main(["arena", "--first", "easy", "--second", "easy", "--games", "4", "--seed", "2"]) == 0
    out = capsys.readouterr().out
    assert "Games:  4" in out
    assert "Wins:" in out


def test_invalid_settings_exit():
    with pytest.raises(SystemExit):
        main(["play", "--size", "3", "--win", "5"])


def test_parser_defaults():
    args = build_parser().parse_args(["play"])
    assert args.size == 3
    assert args.difficulty == "medium"
    assert not args.pvp
