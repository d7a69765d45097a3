"""
Test the scripted demo run end to end.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from demo_session import main  # noqa: E402


def test_demo_writes_outputs_and_closes_figure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    plt.close("all")

    assert main(["demo_session.py"]) == 0

    assert (tmp_path / "MAI_scores.csv").read_text(encoding="utf-8") == (
        "Category,Score,Total\n"
        "Knowledge about Cognition,1,1\n"
        "Procedural Knowledge,0,1\n"
        "Conditional Knowledge,1,1\n"
    )
    assert (tmp_path / "MAI_scores.png").exists()
    assert plt.get_fignums() == []
