"""Tests for quality checks, the generation pipeline and the CLI."""

from types import SimpleNamespace

import numpy as np
import pytest

from rosmapgen.__main__ import main
from rosmapgen.environment import build_environment
from rosmapgen.params import MapParameters
from rosmapgen.pipeline import MapGenerationPipeline, PipelineConfig, generate_batch, generate_map
from rosmapgen.qc import QualityChecker
from rosmapgen.render import FREE, OCCUPIED, render_environment

from conftest import hall


def small_params(**kwargs):
    values = dict(room_count=4, resolution=0.5, robot_size=1.0, seed=21)
    values.update(kwargs)
    return MapParameters(**values)


def fake_environment(halls, width=100, height=100):
    return SimpleNamespace(
        halls=halls,
        corridors=[],
        edges=(),
        width=width,
        height=height,
        separation_passes=1,
    )


# ---------------------------------------------------------------------------
# Quality checks
# ---------------------------------------------------------------------------

def test_qc_accepts_generated_environment():
    env = build_environment(5, 20, 40, 6, 400, 400, seed=4)
    report = QualityChecker().check(env, render_environment(env))

    assert report.is_valid
    assert report.statistics["hall_count"] == len(env.halls)
    assert report.statistics["corridor_count"] == len(env.corridors)
    assert 0 < report.statistics["free_ratio"] < 1


def test_qc_flags_hall_overlap():
    env = fake_environment([hall(0, 0, 10, 10), hall(5, 5, 10, 10)])
    report = QualityChecker().check(env)

    assert not report.is_valid
    assert [w.code for w in report.errors()] == ["HALL_OVERLAP"]


def test_qc_tolerates_one_unit_overlap():
    env = fake_environment([hall(0, 0, 10, 10), hall(9, 0, 10, 10)])
    assert QualityChecker().check(env).is_valid


def test_qc_flags_out_of_bounds():
    env = fake_environment([hall(95, 0, 10, 10)])
    report = QualityChecker().check(env)

    assert not report.is_valid
    assert report.errors()[0].code == "OUT_OF_BOUNDS"


def test_qc_warns_on_empty_and_disconnected_maps():
    empty = QualityChecker().check(fake_environment([]))
    assert empty.is_valid
    assert [w.code for w in empty.warnings] == ["NO_HALLS"]

    grid = np.full((10, 10), OCCUPIED, dtype=np.uint8)
    grid[0:2, 0:2] = FREE
    grid[6:8, 6:8] = FREE
    report = QualityChecker().check(fake_environment([hall(0, 0, 2, 2), hall(6, 6, 2, 2)]), grid)

    assert report.is_valid
    assert report.statistics["free_components"] == 2
    assert "DISCONNECTED" in [w.code for w in report.warnings]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def test_generate_map_exports_files(tmp_path):
    config = PipelineConfig(output_dir=tmp_path, name="office", export_layout=True)
    result = generate_map(small_params(), config)

    assert result.success, result.errors
    assert result.pixels.min_size == 8
    assert result.grid.shape == (result.pixels.height, result.pixels.width)
    assert result.qc_report.is_valid
    assert result.output_paths["pgm"] == tmp_path / "office.pgm"
    assert (tmp_path / "office.yaml").exists()
    assert (tmp_path / "office_layout.json").exists()


def test_pipeline_without_export(tmp_path):
    config = PipelineConfig(output_dir=tmp_path / "unused", export=False)
    result = MapGenerationPipeline(config).run(small_params())

    assert result.success
    assert result.output_paths == {}
    assert not (tmp_path / "unused").exists()


def test_pipeline_reports_configuration_error(tmp_path):
    config = PipelineConfig(output_dir=tmp_path)
    result = generate_map(small_params(resolution=0), config)

    assert not result.success
    assert result.errors
    assert result.environment is None


def test_pipeline_reports_separation_failure(tmp_path):
    config = PipelineConfig(output_dir=tmp_path, max_separation_passes=1)
    result = generate_map(small_params(room_count=10), config)

    assert not result.success
    assert "did not separate" in result.errors[0]
    assert not list(tmp_path.iterdir())


def test_pipeline_is_deterministic(tmp_path):
    config = PipelineConfig(output_dir=tmp_path, export=False)
    first = generate_map(small_params(seed=5), config)
    second = generate_map(small_params(seed=5), config)

    assert np.array_equal(first.grid, second.grid)


def test_generate_batch_uses_consecutive_seeds(tmp_path):
    config = PipelineConfig(output_dir=tmp_path, name="run")
    results = generate_batch(small_params(seed=100), 3, config)

    assert [r.name for r in results] == ["run_0", "run_1", "run_2"]
    assert [r.pixels.seed for r in results] == [100, 101, 102]
    assert all(r.success for r in results)
    assert (tmp_path / "run_2.pgm").exists()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def test_cli_generate(tmp_path):
    code = main([
        "generate", "-c", "3", "-r", "0.5", "-s", "1.0",
        "--random-seed", "9", "-d", str(tmp_path), "-n", "cli_map",
    ])

    assert code == 0
    assert (tmp_path / "cli_map.pgm").exists()
    assert (tmp_path / "cli_map.yaml").exists()


def test_cli_requires_complexity(tmp_path):
    assert main(["generate", "-d", str(tmp_path)]) == 1


def test_cli_rejects_min_without_max(tmp_path):
    code = main(["generate", "-c", "3", "--min-size", "2", "-d", str(tmp_path)])
    assert code == 1
    assert not list(tmp_path.iterdir())


def test_cli_config_file(tmp_path):
    config = tmp_path / "params.yaml"
    config.write_text("room_count: 2\nresolution: 0.5\nrobot_size: 1.0\nseed: 3\n")
    out = tmp_path / "out"

    code = main(["generate", "--config", str(config), "-d", str(out), "-n", "from_file", "--layout"])

    assert code == 0
    assert (out / "from_file.pgm").exists()
    assert (out / "from_file_layout.json").exists()


def test_cli_batch(tmp_path):
    code = main([
        "batch", "-c", "2", "-r", "0.5", "-s", "1.0", "--count", "2",
        "--random-seed", "1", "-d", str(tmp_path), "-n", "set",
    ])

    assert code == 0
    assert (tmp_path / "set_0.pgm").exists()
    assert (tmp_path / "set_1.yaml").exists()


def test_cli_without_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_pipeline_reports_unwritable_output_dir(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    config = PipelineConfig(output_dir=blocker / "maps")

    result = generate_map(small_params(), config)

    assert not result.success
    assert result.errors
    assert result.grid is not None, "generation ran before the export failed"


def test_cli_unwritable_output_dir(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")

    code = main([
        "generate", "-c", "3", "-r", "0.5", "-s", "1.0",
        "--random-seed", "9", "-d", str(blocker / "maps"),
    ])

    assert code == 1


def test_cli_missing_config_file(tmp_path):
    code = main(["generate", "--config", str(tmp_path / "missing.yaml"), "-d", str(tmp_path)])
    assert code == 1


def test_cli_wrongly_typed_config_file(tmp_path):
    config = tmp_path / "params.yaml"
    config.write_text("room_count: ten\n")

    code = main(["generate", "--config", str(config), "-d", str(tmp_path / "out")])

    assert code == 1
    assert not (tmp_path / "out").exists()


def test_cli_help_states_min_max_pairing(capsys):
    with pytest.raises(SystemExit):
        main(["generate", "--help"])

    out = capsys.readouterr().out
    assert "requires --max-size" in out
    assert "requires --min-size" in out
