"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from localenv.contracts import StatusReport
from localenv.kernel.trust_store import TrustDocument


def generate_schemas():
    """Generate JSON schemas for the trust store and the status report."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    # Trust store document (allowed.json)
    trust_schema = TrustDocument.model_json_schema()
    trust_schema_path = schemas_dir / "trust_store.schema.json"
    with open(trust_schema_path, 'w', encoding='utf-8') as f:
        json.dump(trust_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {trust_schema_path}")

    # `localenv status --json` output
    status_schema = StatusReport.model_json_schema()
    status_schema_path = schemas_dir / "status_report.schema.json"
    with open(status_schema_path, 'w', encoding='utf-8') as f:
        json.dump(status_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {status_schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
