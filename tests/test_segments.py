from __future__ import annotations

from segment_snake.segments import (
    Effect,
    SegmentConfiguration,
    SegmentKind,
    TriggerClass,
)


def make_config() -> SegmentConfiguration:
    return SegmentConfiguration([SegmentKind.GUN, SegmentKind.SHIELD, SegmentKind.BODY])


def test_kind_trigger_table() -> None:
    assert SegmentKind.GUN.trigger is TriggerClass.SHORT_PRESS
    assert SegmentKind.GUN.effect is Effect.SHOOT
    assert SegmentKind.SHIELD.trigger is TriggerClass.LONG_PRESS
    assert SegmentKind.SHIELD.effect is Effect.SHIELD
    assert SegmentKind.HEAD.trigger is TriggerClass.NONE
    assert SegmentKind.BODY.trigger is TriggerClass.NONE


def test_head_is_always_first() -> None:
    config = SegmentConfiguration([SegmentKind.HEAD, SegmentKind.GUN])
    assert config.kinds == (SegmentKind.HEAD, SegmentKind.GUN)
    assert SegmentConfiguration().kinds == (SegmentKind.HEAD,)


def test_append_and_insert() -> None:
    config = make_config()
    assert config.append(SegmentKind.GUN)
    assert config[-1] is SegmentKind.GUN
    assert not config.append(SegmentKind.HEAD)
    assert config.insert(1, SegmentKind.BODY)
    assert config[1] is SegmentKind.BODY
    assert not config.insert(0, SegmentKind.GUN)
    assert config[0] is SegmentKind.HEAD


def test_remove_at_rejects_head_and_out_of_range() -> None:
    config = make_config()
    assert config.remove_at(0) is None
    assert config.remove_at(4) is None
    assert config.remove_at(-1) is None
    assert len(config) == 4
    assert config.remove_at(1) is SegmentKind.GUN
    assert config.kinds == (SegmentKind.HEAD, SegmentKind.SHIELD, SegmentKind.BODY)


def test_move_to_reorders_without_touching_head() -> None:
    config = make_config()
    assert config.move_to(1, 3)
    assert config.kinds == (
        SegmentKind.HEAD,
        SegmentKind.SHIELD,
        SegmentKind.BODY,
        SegmentKind.GUN,
    )
    assert not config.move_to(0, 2)
    assert not config.move_to(2, 0)
    assert not config.move_to(1, 9)
    assert config[0] is SegmentKind.HEAD


def test_kinds_with_trigger_in_list_order() -> None:
    config = make_config()
    config.append(SegmentKind.GUN)
    assert config.kinds_with_trigger(TriggerClass.SHORT_PRESS) == [
        (1, SegmentKind.GUN),
        (4, SegmentKind.GUN),
    ]
    assert config.kinds_with_trigger(TriggerClass.LONG_PRESS) == [(2, SegmentKind.SHIELD)]


def test_availability_recomputed_after_changes() -> None:
    config = make_config()
    assert config.has_trigger(TriggerClass.SHORT_PRESS)
    config.remove_at(1)
    assert not config.has_trigger(TriggerClass.SHORT_PRESS)
    assert config.has_trigger(TriggerClass.LONG_PRESS)
    config.append(SegmentKind.GUN)
    assert config.has_trigger(TriggerClass.SHORT_PRESS)
