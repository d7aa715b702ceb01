import pytest


class ScriptedInput:
    """Input fed by code: ``press("left", "rotate")`` then the next tick sees them."""
    def __init__(self):
        self.pending = set()

    def press(self, *names):
        self.pending.update(names)

    def just_pressed(self, name):
        if name in self.pending:
            self.pending.discard(name)
            return True
        return False


@pytest.fixture
def keys():
    return ScriptedInput()
