"""Basic package tests for gridcollapse."""

import logging


def test_package_imports():
    """Test that the package can be imported."""
    import gridcollapse
    assert gridcollapse.__version__ == "0.1.0"


def test_wfc_imports():
    """Test that the engine subpackage exposes its public names."""
    from gridcollapse.wfc import Tile, Definite, Indefinite, Span, View, WfcRules, Wfc, StepResult


def test_rules_imports():
    """Test that rules subpackage can be imported."""
    import gridcollapse.rules
    from gridcollapse.rules import SudokuRules, SudokuNum


def test_logging_setup(temp_data_dir):
    """Test that logging can be set up."""
    from gridcollapse.logging_config import setup_logging

    log_path = setup_logging(temp_data_dir)
    assert log_path.exists()
    assert log_path.name == "debug.log"
    logging.getLogger("gridcollapse").handlers.clear()


def test_engine_logs_under_package_namespace(caplog):
    """Engine step logging goes to the gridcollapse.* hierarchy."""
    from gridcollapse.wfc import Indefinite, Wfc, WfcRules

    class Anything(WfcRules):
        def get_states(self, view):
            return {1, 2}

    wfc = Wfc(2, 1, [Indefinite({1, 2}), Indefinite({1, 2})], Anything(), seed=0)
    with caplog.at_level(logging.DEBUG, logger="gridcollapse"):
        wfc.step()

    assert any(r.name == "gridcollapse.wfc.solver" and "STEP 00001" in r.getMessage() for r in caplog.records)
