import argparse
import json
from pathlib import Path

from readlist_api.main import app


def write_schema(output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(app.openapi(), f, indent=2)
    return output_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Export the Readlist API OpenAPI schema.")
    parser.add_argument("--output", type=Path, default=Path("docs") / "openapi.json")
    args = parser.parse_args()

    output_path = write_schema(args.output)
    print(f"OpenAPI spec for {app.title} {app.version} written to {output_path}")


if __name__ == "__main__":
    main()
