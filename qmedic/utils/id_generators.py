# qmedic/utils/id_generators.py
import random


def generate_case_id() -> str:
    """
    Generate a case identifier for actions logged without one.

    Format: C{5 digits}, e.g. C48213. Not guaranteed unique; case ids are
    grouping tags, not keys.
    """
    return f"C{random.randint(10000, 99999)}"
