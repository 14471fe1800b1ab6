import json
import os

import numpy as np
import pandas as pd
import pytest

from sysgen import (
    ConfigurationError,
    DataWriter,
    bodies_to_frame,
    generate,
    load_config,
    summarize,
    to_arrays,
    to_com_frame,
    write_csv,
)
from sysgen.cli import main


@pytest.fixture
def bodies(solar_tree, quiet):
    return generate(solar_tree, 11, quiet)


def test_to_arrays_layout(bodies):
    m, p, v, r = to_arrays(bodies)

    assert m.shape == (10,)
    assert p.shape == (10, 2) and v.shape == (10, 2)
    assert r.shape == (10,)
    assert m[0] == 100.0
    assert tuple(p[-1]) == (10.0, 0.0)


def test_com_frame_has_zero_momentum(bodies):
    m, _, v, _ = to_arrays(bodies, com_frame=True)
    assert np.allclose(np.sum(m[:, None] * v, axis=0), 0.0)


def test_to_arrays_empty():
    m, p, v, r = to_arrays([], com_frame=True)
    assert m.shape == (0,) and p.shape == (0, 2)


def test_frame_and_summary(bodies):
    df = bodies_to_frame(bodies)
    assert list(df["template"]) == [b.template for b in bodies]
    assert df.loc[0, "mass"] == 100.0

    info = summarize(bodies)
    assert info["n_bodies"] == 10
    assert info["per_template"] == {"sun": 1, "planets": 7, "earth": 1, "moon": 1}
    assert info["total_mass"] == pytest.approx(sum(b.mass for b in bodies))


def test_summary_of_nothing():
    info = summarize([])
    assert info["total_mass"] == 0.0
    assert info["com_position"] == (0.0, 0.0)


def test_data_writer_numbers_frames(tmp_path, bodies):
    writer = DataWriter(str(tmp_path / "data"))

    first = writer.write(bodies[:1])
    second = writer.write(bodies[-1:])

    assert os.path.basename(first) == "frame-0.txt"
    assert os.path.basename(second) == "frame-1.txt"
    with open(first) as f:
        assert f.read() == "0.0,0.0\n"
    with open(second) as f:
        assert f.read() == "10.0,0.0\n"


def test_write_csv_round_trip(tmp_path, bodies):
    path = str(tmp_path / "bodies.csv")
    write_csv(bodies, path)

    df = pd.read_csv(path)
    assert len(df) == 10
    assert df.loc[9, "template"] == "moon"
    assert df.loc[9, "vy"] == 2.0


def test_load_yaml_and_json(tmp_path, solar_system_path):
    tree = load_config(solar_system_path)
    assert [g["name"] for g in tree["gens"]] == ["p_mass", "p_trans", "p_vel", "p_rot"]

    path = tmp_path / "system.json"
    path.write_text(json.dumps(tree))
    assert load_config(str(path)) == tree


def test_load_rejects_bad_documents(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_config(str(bad))

    listy = tmp_path / "list.yaml"
    listy.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_config(str(listy))

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_config(str(empty)) == {}


def test_cli_generates_and_saves(tmp_path, capsys, solar_system_path):
    csv_path = str(tmp_path / "out.csv")
    code = main([solar_system_path, "--seed", "3", "--quiet", "--csv", csv_path,
                 "--frames", str(tmp_path / "frames")])

    assert code == 0
    out = capsys.readouterr().out
    assert "Generated 10 bodies" in out
    assert os.path.exists(csv_path)
    assert os.path.exists(tmp_path / "frames" / "frame-0.txt")


def test_cli_named_system(capsys, solar_system_path):
    assert main([solar_system_path, "--seed", "1", "--quiet", "--system", "planets"]) == 0
    assert "Generated 7 bodies" in capsys.readouterr().out


def test_cli_reports_errors(tmp_path, capsys):
    path = tmp_path / "cycle.yaml"
    path.write_text(
        "bodies:\n  - {name: sun, m: 1.0}\n"
        "systems:\n  - name: loop\n    systems:\n      - name: sun\n      - name: loop\n"
    )
    assert main([str(path), "--quiet"]) == 1
    assert "[error] system substitution cycle" in capsys.readouterr().err


def test_to_com_frame_shifts_velocities_only(bodies):
    shifted = to_com_frame(bodies)

    m, _, v, _ = to_arrays(shifted)
    assert np.allclose(np.sum(m[:, None] * v, axis=0), 0.0)
    assert [b.translation for b in shifted] == [b.translation for b in bodies]
    assert [b.template for b in shifted] == [b.template for b in bodies]


def test_cli_com_frame(tmp_path, capsys, solar_system_path):
    csv_path = str(tmp_path / "com.csv")
    code = main([solar_system_path, "--seed", "1", "--quiet", "--com-frame", "--csv", csv_path])

    assert code == 0
    df = pd.read_csv(csv_path)
    momentum = (df["mass"] * df["vx"]).sum(), (df["mass"] * df["vy"]).sum()
    assert np.allclose(momentum, 0.0)
    assert "Generated 10 bodies" in capsys.readouterr().out
