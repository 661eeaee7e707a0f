import pytest

from cryptforge.dungeon.templates import (
    CIRCULAR,
    DEFAULT_TEMPLATES,
    RECTANGULAR,
    RoomTemplateRegistry,
    TemplateRegistryError,
)

BY_SHAPE = {t.shape: t for t in DEFAULT_TEMPLATES}


def test_empty_registry_raises():
    reg = RoomTemplateRegistry(1)
    with pytest.raises(TemplateRegistryError):
        reg.select_random_template()


def test_zero_weight_template_is_never_selected():
    reg = RoomTemplateRegistry(5)
    reg.register_template(BY_SHAPE[RECTANGULAR], 0.0)
    reg.register_template(BY_SHAPE[CIRCULAR], 1.0)
    picks = {reg.select_random_template().shape for _ in range(200)}
    assert picks == {CIRCULAR}


def test_weights_default_and_unknown_shapes():
    reg = RoomTemplateRegistry(5)
    reg.register_template(BY_SHAPE[RECTANGULAR])
    assert reg.get_weight(RECTANGULAR) == 1.0
    assert reg.get_weight("hexagonal") == 0.0
    reg.set_weight("hexagonal", 3.0)
    assert "hexagonal" not in reg
    assert reg.get_weight("hexagonal") == 0.0
    reg.set_weight(RECTANGULAR, -2)
    assert reg.get_weight(RECTANGULAR) == 0.0


def test_register_replaces_and_unregister_removes():
    reg = RoomTemplateRegistry(5)
    reg.register_template(BY_SHAPE[RECTANGULAR], 1.0)
    reg.register_template(BY_SHAPE[RECTANGULAR], 2.5)
    assert len(reg) == 1
    assert reg.get_weight(RECTANGULAR) == 2.5
    assert reg.get_template(RECTANGULAR) is BY_SHAPE[RECTANGULAR]
    assert reg.unregister_template(RECTANGULAR) is True
    assert reg.unregister_template(RECTANGULAR) is False
    assert reg.get_template(RECTANGULAR) is None
    assert len(reg) == 0


def test_selection_is_seeded():
    def picks(seed):
        reg = RoomTemplateRegistry(seed)
        for t in DEFAULT_TEMPLATES:
            reg.register_template(t)
        return [reg.select_random_template().shape for _ in range(30)]

    assert picks(99) == picks(99)
    # uniform weights over eight shapes should reach more than one of them
    assert len(set(picks(99))) > 1
