"""Smoke test of the worked example script."""

import pytest

from ampacity import example


def test_main(capsys):
    rating_amps = example.main()
    assert rating_amps == pytest.approx(1028.28, abs=0.5)
    out = capsys.readouterr().out
    assert "rating for 795 Drake at 100C | 1028 Amps" in out
    assert "transient rating of 795 Drake" in out
