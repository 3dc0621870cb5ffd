from bodyfuzz.runner.http_runner import HttpRunner

__all__ = ["HttpRunner"]
