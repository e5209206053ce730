"""Unit tests for LedStrip."""

import pytest

from afterglow.exceptions import AfterglowError, InvalidLedCountError, LedIndexError
from afterglow.led import LedStrip, encode
from afterglow.models import LedColor


class TestLedStripConstruction:
    """Creating strips."""

    @pytest.mark.unit
    def test_starts_dark(self):
        strip = LedStrip(5)

        assert len(strip) == 5
        assert strip.num_leds == 5
        assert all(color == LedColor.off() for color in strip)

    @pytest.mark.unit
    @pytest.mark.parametrize("num_leds", [0, -1])
    def test_rejects_non_positive(self, num_leds):
        with pytest.raises(InvalidLedCountError):
            LedStrip(num_leds)

    @pytest.mark.unit
    def test_from_colors(self, red):
        strip = LedStrip.from_colors([red, LedColor.off()])

        assert strip.colors == (red, LedColor.off())

    @pytest.mark.unit
    def test_repr(self):
        assert repr(LedStrip(3)) == "LedStrip(num_leds=3)"


class TestLedStripAccess:
    """Bounds-checked get and set."""

    @pytest.fixture
    def strip(self):
        return LedStrip(4)

    @pytest.mark.unit
    def test_set_and_get(self, strip, red):
        strip.set(2, red)

        assert strip.get(2) == red
        assert strip.get(1) == LedColor.off()

    @pytest.mark.unit
    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_get_out_of_range(self, strip, index):
        with pytest.raises(LedIndexError) as exc_info:
            strip.get(index)
        assert exc_info.value.index == index
        assert exc_info.value.led_count == 4

    @pytest.mark.unit
    @pytest.mark.parametrize("index", [-1, 4])
    def test_set_out_of_range_leaves_strip_untouched(self, strip, red, index):
        before = strip.serialize()

        with pytest.raises(LedIndexError):
            strip.set(index, red)

        assert strip.colors == (LedColor.off(),) * 4
        assert not strip.is_dirty
        assert strip.serialize() is before

    @pytest.mark.unit
    def test_index_error_is_builtin_and_app_error(self, strip):
        with pytest.raises(IndexError):
            strip.get(9)
        with pytest.raises(AfterglowError):
            strip.get(9)

    @pytest.mark.unit
    def test_update(self, strip, red):
        colors = [red, LedColor.off(), red, LedColor.off()]
        strip.update(colors)
        assert list(strip) == colors

    @pytest.mark.unit
    def test_update_wrong_length(self, strip, red):
        with pytest.raises(ValueError):
            strip.update([red] * 3)
        assert strip.colors == (LedColor.off(),) * 4

    @pytest.mark.unit
    def test_fill_and_clear(self, strip, red):
        strip.fill(red)
        assert strip.colors == (red,) * 4

        strip.clear()
        assert strip.colors == (LedColor.off(),) * 4

    @pytest.mark.unit
    def test_to_words(self, strip):
        strip.set(0, LedColor(r=0x4B, g=0x80, b=0x40))
        assert strip.to_words() == [0x4B8040, 0, 0, 0]

    @pytest.mark.unit
    def test_colors_is_a_snapshot(self, strip, red):
        snapshot = strip.colors
        strip.set(0, red)
        assert snapshot[0] == LedColor.off()


class TestLedStripSerialize:
    """Encoded output and its cache."""

    @pytest.mark.unit
    def test_matches_encoder(self, red):
        strip = LedStrip(3)
        strip.set(1, red)
        assert strip.serialize() == encode([LedColor.off(), red, LedColor.off()])

    @pytest.mark.unit
    def test_cached_until_mutation(self, red):
        strip = LedStrip(3)

        first = strip.serialize()
        assert strip.serialize() is first
        assert not strip.is_dirty

        strip.set(0, red)
        assert strip.is_dirty
        second = strip.serialize()
        assert second is not first
        assert second != first

    @pytest.mark.unit
    @pytest.mark.parametrize("index", [0, 3, 7])
    def test_mutation_changes_only_its_frame(self, index):
        strip = LedStrip(8)
        before = strip.serialize()

        strip.set(index, LedColor(r=10, g=20, b=30))
        after = strip.serialize()

        changed = [i for i in range(len(before)) if before[i] != after[i]]
        assert changed
        assert all(4 + 4 * index <= i < 8 + 4 * index for i in changed)
        assert after[4 + 4 * index:8 + 4 * index] == b"\xff\x1e\x14\x0a"

    @pytest.mark.unit
    def test_set_same_color_still_marks_dirty(self):
        strip = LedStrip(2)
        strip.serialize()
        strip.set(0, LedColor.off())
        assert strip.is_dirty


class TestLedStripColorValidation:
    """Non-LedColor values are rejected before anything changes."""

    @pytest.fixture
    def strip(self, red):
        strip = LedStrip.from_colors([red, LedColor.off(), red])
        strip.serialize()
        return strip

    def assert_untouched(self, strip, red, cached):
        assert strip.colors == (red, LedColor.off(), red)
        assert not strip.is_dirty
        assert strip.serialize() is cached

    @pytest.mark.unit
    def test_set_rejects_tuple(self, strip, red):
        cached = strip.serialize()

        with pytest.raises(TypeError):
            strip.set(0, (255, 0, 0))

        self.assert_untouched(strip, red, cached)

    @pytest.mark.unit
    def test_fill_rejects_non_color(self, strip, red):
        cached = strip.serialize()

        with pytest.raises(TypeError):
            strip.fill("#FF0000")

        self.assert_untouched(strip, red, cached)

    @pytest.mark.unit
    def test_update_rejects_mixed_sequence(self, strip, red):
        cached = strip.serialize()

        with pytest.raises(TypeError):
            strip.update([red, None, red])

        self.assert_untouched(strip, red, cached)

    @pytest.mark.unit
    def test_from_colors_rejects_non_color(self):
        with pytest.raises(TypeError):
            LedStrip.from_colors([0xFF0000])
