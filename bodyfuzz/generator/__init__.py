from bodyfuzz.generator.base import Mutation, TestCase, describe_value
from bodyfuzz.generator.walker import generate

__all__ = ["Mutation", "TestCase", "describe_value", "generate"]
