"""
Tests for the command-line entry point.
"""
import importlib.util
import os

import numpy as np
import pytest

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(__file__)), "scripts", "run_clustering.py")


@pytest.fixture
def run_clustering():
    spec = importlib.util.spec_from_file_location("run_clustering", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_main_writes_labels(tmp_path, two_block_views, run_clustering, capsys):
    view1, view2 = two_block_views
    p1, p2 = tmp_path / "v1.csv", tmp_path / "v2.csv"
    np.savetxt(p1, view1, delimiter=",")
    np.savetxt(p2, view2, delimiter=",")
    out = tmp_path / "out" / "labels.txt"
    plot = tmp_path / "tree.png"

    code = run_clustering.main([
        "--view1", str(p1), "--view2", str(p2), "--k", "2", "--nthresh", "5",
        "--output", str(out), "--plot-file", str(plot),
    ])

    assert code == 0
    labels = np.loadtxt(out, dtype=int)
    assert labels.shape == (6,)
    assert len(set(labels[:3].tolist())) == 1
    assert labels[0] != labels[3]
    assert plot.is_file()
    assert "Agreement rate: 1.0000" in capsys.readouterr().out


def test_main_reports_bad_input(tmp_path, run_clustering, capsys):
    p1, p2 = tmp_path / "v1.npy", tmp_path / "v2.npy"
    np.save(p1, np.eye(3))
    np.save(p2, np.eye(2))

    code = run_clustering.main(["--view1", str(p1), "--view2", str(p2)])

    assert code == 1
    assert "row count" in capsys.readouterr().out
