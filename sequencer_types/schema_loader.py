from pathlib import Path
import json

SCHEMAS_DIR = Path(__file__).resolve().parent / "contracts" / "schemas"


def load_schema(name: str):
    schema_path = SCHEMAS_DIR / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Missing canonical schema: {schema_path}")
    return json.loads(schema_path.read_text(encoding="utf-8"))
