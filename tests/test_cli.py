import secrets

import pytest
from find_big_prime.cli import build_parser, main
from find_big_prime.utils.math import is_probable_prime


class TestCommandLine:
    """
    Tests for the find-big-prime command line shell.
    """

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.bits == 2048
        assert args.rounds == 64
        assert args.safe is False
        assert args.seed is None

    def test_prints_bit_length_then_prime(self, capsys):
        exit_code = main(["--bits", "512", "--rounds", "10"])
        lines = capsys.readouterr().out.splitlines()

        assert exit_code == 0
        assert len(lines) == 2
        assert lines[0] == "prime_bits=512"
        value = int(lines[1])
        assert value.bit_length() == 512
        assert is_probable_prime(value, 10) is True

    def test_seeded_runs_are_reproducible(self, capsys):
        main(["-b", "512", "--rounds", "5", "--seed", "7"])
        first = capsys.readouterr().out
        main(["-b", "512", "--rounds", "5", "--seed", "7"])
        second = capsys.readouterr().out

        assert first == second

    def test_safe_flag_uses_safe_label(self, capsys):
        exit_code = main(["--bits", "512", "--rounds", "5", "--safe", "--seed", "11"])
        lines = capsys.readouterr().out.splitlines()

        assert exit_code == 0
        assert lines[0] == "safe_prime_bits=512"
        value = int(lines[1])
        assert is_probable_prime((value - 1) // 2, 10) is True

    @pytest.mark.parametrize("bits", ["256", "511"])
    def test_too_few_bits_fails_with_message(self, bits, capsys):
        exit_code = main(["--bits", bits])
        captured = capsys.readouterr()

        assert exit_code == 2
        assert captured.out == ""
        assert "512 bits" in captured.err

    def test_invalid_rounds_fails_with_message(self, capsys):
        exit_code = main(["--bits", "512", "--rounds", "0"])
        assert exit_code == 2
        assert "rounds" in capsys.readouterr().err

    def test_entropy_failure_exits_with_error(self, monkeypatch, capsys):
        def broken_randbits(k):
            raise OSError("no entropy")

        monkeypatch.setattr(secrets, "randbits", broken_randbits)

        exit_code = main(["--bits", "512"])
        captured = capsys.readouterr()

        assert exit_code == 1
        assert captured.out == ""
        assert "Secure random source is unavailable" in captured.err
