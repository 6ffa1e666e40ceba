# linkwalk/report/json_report.py

"""
JSON report generation for LinkWalk.

Serialises a CrawlReport into a file.
"""
import json
from pathlib import Path
from dataclasses import asdict

from linkwalk.aggregator import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Save *report* as JSON at the given path.

    :param report: CrawlReport with walk results
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from linkwalk.report.json_report import render_json
    report_path = render_json(report, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(asdict(report), f, ensure_ascii=False, indent=2)

    return output
