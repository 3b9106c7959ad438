# qmedic/core/action_context.py


class ActionContext:
    """
    Who is acting and under which case, passed explicitly to every
    inventory action instead of being read from ambient state.

    - user:    display name of the acting user
    - case_id: freeform grouping tag (incident / case number)
    """

    def __init__(self, user: str, case_id: str):
        self.user = user
        self.case_id = case_id

    def __repr__(self) -> str:
        return f"ActionContext(user={self.user!r}, case_id={self.case_id!r})"
