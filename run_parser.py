"""Run the CSV tokenizer and print row/column stats. Usage: python run_parser.py [path/to/file.csv]"""

import sys
from pathlib import Path

# Allow running from project root without installing
sys.path.insert(0, str(Path(__file__).resolve().parent))

from src.facility_insights.builder import build_facility
from src.facility_insights.config import DEFAULT_CSV
from src.facility_insights.pipeline import decode_csv
from src.facility_insights.tokenizer import read_headers, recognized_columns, tokenize, unknown_columns


def main() -> None:
    csv_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_CSV
    if not csv_path.exists():
        print(f"CSV not found: {csv_path}")
        sys.exit(1)
    text = decode_csv(csv_path.read_bytes())
    headers = read_headers(text)
    rows = tokenize(text)
    with_id = sum(1 for r in rows if r.unique_id or r.pk_unique_id)
    print(f"Total rows: {len(rows)}")
    print(f"Columns: {len(headers)} ({len(recognized_columns(headers))} recognized)")
    ignored = unknown_columns(headers)
    if ignored:
        print(f"Ignored columns: {', '.join(ignored)}")
    print(f"With unique_id/pk_unique_id: {with_id}")
    print(f"Without id (synthesized): {len(rows) - with_id}")
    if rows:
        f0 = build_facility(rows[0], 0)
        print(f"Sample: {f0.name} | {f0.facility_type} | {f0.city} | {f0.region or '-'} | score {f0.data_completeness_score}")


if __name__ == "__main__":
    main()
