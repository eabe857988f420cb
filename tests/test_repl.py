"""Tests for the interactive REPL command handling."""

from __future__ import annotations

import pytest

from weilegend.cli.repl import PROFESSION_ALIASES, GameREPL
from weilegend.engine import EngineConfig
from weilegend.models.character import ItemName, Profession
from weilegend.models.equipment import EquipmentSlot


@pytest.fixture
def repl():
    return GameREPL()


@pytest.fixture
def state(repl):
    return repl.build_state(EngineConfig(), "测试", Profession.WARRIOR, seed=3)


class TestCommandRegistry:
    """Tests for command registration and parsing."""

    def test_aliases_share_handler(self, repl):
        assert repl.commands["q"] is repl.commands["quit"]
        assert repl.commands["b"] is repl.commands["bag"]

    def test_parse_command(self, repl):
        assert repl._parse_command("/BUY 金创药 3") == ("buy", ["金创药", "3"])
        assert repl._parse_command("/") == ("", [])

    def test_non_command(self, repl, state):
        assert "以 / 开头" in repl.process_input("打怪", state)

    def test_unknown_command(self, repl, state):
        assert repl.process_input("/dance", state).startswith("未知命令：/dance")

    def test_help_lists_each_command_once(self, repl, state):
        text = repl.process_input("/help", state)
        assert text.count("/quit") == 1
        assert "/fight (f)" in text

    def test_profession_aliases(self):
        assert PROFESSION_ALIASES["mage"] == Profession.MAGE
        assert PROFESSION_ALIASES["道士"] == Profession.TAOIST


class TestSession:
    """Tests for a scripted session."""

    def test_new_character(self, state):
        assert state.character.name == "测试"
        assert state.map_id == "bichi_outskirts"

    def test_status(self, repl, state):
        text = repl.process_input("/status", state)
        assert text.startswith("测试（战士） Lv.1")
        assert "当前地图：比奇郊外" in text

    def test_fight(self, repl, state):
        text = repl.process_input("/fight", state)
        assert text.startswith("你在【比奇郊外】遭遇")

    def test_maps(self, repl, state):
        assert "骷髅洞" in repl.process_input("/maps", state)
        assert "等级不足" in repl.process_input("/maps skeleton_cave", state)
        assert repl.process_input("/maps nowhere", state) == "地图不存在。"

    def test_shop_and_buy(self, repl, state):
        assert "金创药 60 金币" in repl.process_input("/shop", state)
        repl.process_input("/buy 金创药 2", state)
        assert state.character.count(ItemName.HP_POTION) == 12

    def test_bad_arguments_are_reported(self, repl, state):
        assert repl.process_input("/equip x", state) == "装备编号无效。"
        assert repl.process_input("/unequip", state) == "用法：/unequip 槽位"
        assert repl.process_input("/sell", state) == "用法：/sell 编号|all|junk"

    def test_bag_and_unequip(self, repl, state):
        assert "背包（0 件）" in repl.process_input("/bag", state)
        assert repl.process_input("/unequip weapon", state) == "该槽位没有装备。"
        assert state.character.equipments[EquipmentSlot.WEAPON] is None

    def test_potion_thresholds(self, repl, state):
        repl.process_input("/potion 50 40", state)
        config = state.character.potion_config
        assert (config.auto_hp_threshold, config.auto_mp_threshold) == (50, 40)

    def test_idle(self, repl, state):
        text = repl.process_input("/idle bichi_outskirts 1", state)
        assert text.startswith("开始挂机：地图【比奇郊外】，计划 1 分钟。")
        assert "挂机统计：1/1 分钟" in text
        assert not state.idle.running

    def test_sets_without_sets(self, repl, state):
        assert repl.process_input("/sets", state) == "当前未穿戴任何套装。"

    def test_save_and_quit(self, repl, state):
        assert repl.process_input("/save", state) == "存档完成。"
        repl.process_input("/quit", state)
        assert not state.running
        assert state.saves.load().name == "测试"
