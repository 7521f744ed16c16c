import importlib.util
from pathlib import Path
import sys
import pytest

@pytest.fixture()
def load_script():
    mod_path = Path(__file__).resolve().parents[1] / "scripts" / "analyze_gcode.py"
    spec = importlib.util.spec_from_file_location("analyze_gcode", mod_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module
