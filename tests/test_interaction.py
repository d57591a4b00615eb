import pytest

from charting.drawing.interaction import DrawingInteraction, InteractionState


@pytest.fixture
def interaction(manager):
    return DrawingInteraction(manager)


def test_drag_creates_drawing(interaction, manager, p1, p2):
    interaction.select_tool('trendline')
    assert interaction.state == InteractionState.TOOL_SELECTED

    interaction.pointer_down(p1)
    assert interaction.state == InteractionState.FIRST_POINT_PLACED

    interaction.pointer_move(p2)
    assert interaction.state == InteractionState.PREVIEWING
    assert manager.active_drawing.points == [p1, p2]

    interaction.pointer_up(p2)
    assert interaction.state == InteractionState.IDLE
    assert interaction.tool is None
    assert len(manager.lines) == 1


def test_click_click_creates_drawing(interaction, manager, p1, p2):
    interaction.select_tool('rectangle')
    interaction.pointer_down(p1)
    interaction.pointer_up(p1)
    assert interaction.state == InteractionState.FIRST_POINT_PLACED

    interaction.pointer_move(p2)
    interaction.pointer_down(p2)

    assert interaction.state == InteractionState.IDLE
    assert len(manager.shapes) == 1
    assert manager.shapes[0].points == (p1, p2)


def test_pointer_events_ignored_when_idle(interaction, manager, p1):
    interaction.pointer_down(p1)
    interaction.pointer_move(p1)
    interaction.pointer_up(p1)
    assert interaction.state == InteractionState.IDLE
    assert manager.active_drawing is None


def test_cancel_discards_preview(interaction, manager, p1, p2):
    interaction.select_tool('circle')
    interaction.pointer_down(p1)
    interaction.pointer_move(p2)

    interaction.cancel()

    assert interaction.state == InteractionState.IDLE
    assert manager.active_drawing is None
    assert manager.shapes == ()


def test_selecting_another_tool_discards_preview(interaction, manager, p1, p2):
    interaction.select_tool('trendline')
    interaction.pointer_down(p1)
    interaction.pointer_move(p2)

    interaction.select_tool('ray')

    assert interaction.state == InteractionState.TOOL_SELECTED
    assert interaction.tool == 'ray'
    assert manager.active_drawing is None
    assert manager.lines == ()


def test_cursor_and_unknown_tool_stay_idle(interaction):
    interaction.select_tool('cursor')
    assert interaction.state == InteractionState.IDLE
    interaction.select_tool('lasso')
    assert interaction.state == InteractionState.IDLE
    assert interaction.tool is None


def test_alias_tool_is_normalized(interaction):
    interaction.select_tool('horizontal')
    assert interaction.tool == 'horizontal-line'


def test_text_tool_places_label(interaction, manager, p1):
    interaction.select_tool('text', text="Сопротивление")
    interaction.pointer_down(p1)

    assert interaction.state == InteractionState.IDLE
    assert len(manager.texts) == 1
    assert manager.texts[0].point == p1
