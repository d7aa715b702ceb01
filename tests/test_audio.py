import pygame
import pytest

from tetris_audio import EFFECTS, RATE, ToneAudio, synth


class FakeSound:
    def __init__(self, name, played):
        self.name, self.played = name, played
    def play(self):
        self.played.append(self.name)


@pytest.fixture
def audio(monkeypatch):
    def no_device(*a, **kw):
        raise pygame.error("no audio device")
    monkeypatch.setattr(pygame.mixer, "get_init", lambda: None)
    monkeypatch.setattr(pygame.mixer, "init", no_device)
    a = ToneAudio()
    assert a.sounds == {}
    a.played = []
    a.sounds = {name: FakeSound(name, a.played) for name in EFFECTS}
    return a


def test_every_clear_size_has_an_effect():
    for n in range(1, 5):
        assert f"clear{n}" in EFFECTS
    assert {"move", "rotate", "soft", "hard", "level", "gameover"} <= set(EFFECTS)


def test_synth_length_follows_longest_tone():
    assert len(synth([(200, 0.05, "square", 0.05, 0)], 1000)) == 50
    # second tone starts late and runs past the first
    assert len(synth(EFFECTS["gameover"])) == int((0.2 + 0.5) * RATE)


def test_synth_stays_in_range():
    for name, tones in EFFECTS.items():
        buf = synth(tones, 8000)
        loudest = sum(t[3] for t in tones)
        assert max(abs(v) for v in buf) <= loudest + 1e-9, name


def test_synth_fades_out():
    buf = synth([(100, 0.1, "square", 1.0, 0)], 1000)
    assert abs(buf[0]) == 1.0
    assert abs(buf[-1]) < 0.05


@pytest.mark.parametrize("count, effect", [(1, "clear1"), (2, "clear2"), (3, "clear3"),
                                           (4, "clear4"), (5, "clear4"), (0, "clear1")])
def test_line_clear_picks_effect_by_count(audio, count, effect):
    audio.on_line_clear(count)
    assert audio.played == [effect]


def test_gameplay_hooks(audio):
    audio.on_move(); audio.on_rotate(); audio.on_hard_drop()
    audio.on_level_up(2); audio.on_game_over(100)
    assert audio.played == ["move", "rotate", "hard", "level", "gameover"]


def test_mute_silences(audio):
    audio.on_mute(True)
    audio.on_move()
    audio.on_line_clear(4)
    assert audio.played == []
    audio.on_mute(False)
    audio.on_move()
    assert audio.played == ["move"]


def test_silent_when_mixer_unavailable(monkeypatch):
    def no_device(*a, **kw):
        raise pygame.error("no audio device")
    monkeypatch.setattr(pygame.mixer, "get_init", lambda: None)
    monkeypatch.setattr(pygame.mixer, "init", no_device)
    a = ToneAudio(muted=True)
    a.on_line_clear(2)
    assert a.sounds == {} and a.muted is True
