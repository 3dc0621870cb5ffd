from bodyfuzz.reporters.json_report import cases_to_json, generate_json_report, save_cases

__all__ = [
    "cases_to_json",
    "generate_json_report",
    "save_cases",
]
