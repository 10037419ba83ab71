"""
Tests for the command-line runner helpers.
"""

from conftest import make_unit

from wavecombat.main import build_parser, main, make_names_unique, pick_units


def test_make_names_unique():
    units = [make_unit(name="Goblin"), make_unit(name="Goblin"), make_unit(name="Imp")]
    make_names_unique(units)
    assert [unit.name for unit in units] == ["Goblin (1)", "Goblin (2)", "Imp"]


def test_pick_units_copies_and_warns(mocker):
    mock_warning = mocker.patch("wavecombat.main.log_warning")
    source = {"Goblin": make_unit(name="Goblin")}
    picked = pick_units(source, ["Goblin", "Goblin", "Dragon"])
    assert len(picked) == 2
    assert picked[0] is not source["Goblin"]
    assert picked[0] is not picked[1]
    picked[0].grant_experience(10)
    assert source["Goblin"].pending_exp == 0
    mock_warning.assert_called_once()


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert not args.auto
    assert args.seed is None
    assert args.waves == 3
    assert args.log_level == "WARNING"


def test_main_runs_an_automated_battle(mocker):
    mocker.patch("wavecombat.main.setup_logging")
    assert main(["--auto", "--seed", "3", "--waves", "1"]) == 0
