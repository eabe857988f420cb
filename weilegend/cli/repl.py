"""
Interactive REPL for Wei Legend.

Provides a text-based interface for playing the game.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from weilegend.content import DEFAULT_CONTENT
from weilegend.db.interfaces import SaveRepository
from weilegend.db.memory import InMemorySaveRepository, JsonFileSaveRepository
from weilegend.engine import BattleEngine, EngineConfig
from weilegend.mechanics.dice import Dice
from weilegend.models.character import Character, ItemName, Profession
from weilegend.models.content import MapArea
from weilegend.models.equipment import SLOT_ORDER, format_equipment
from weilegend.services import character as commands
from weilegend.services.idle import IdleRunner
from weilegend.services.persistence import SaveService

logger = logging.getLogger(__name__)

PROFESSION_ALIASES: dict[str, Profession] = {
    "warrior": Profession.WARRIOR,
    "mage": Profession.MAGE,
    "taoist": Profession.TAOIST,
    **{p.value: p for p in Profession},
}


@dataclass
class GameState:
    """Current state of the game session."""

    engine: BattleEngine
    saves: SaveService
    character: Character
    idle: IdleRunner
    map_id: str
    running: bool = True


@dataclass
class Command:
    """A special REPL command."""

    name: str
    aliases: list[str]
    description: str
    handler: Callable[[GameState, list[str]], str | None]


def _parse_int(text: str, default: int | None = None) -> int | None:
    try:
        return int(text)
    except ValueError:
        return default


class GameREPL:
    """
    Interactive REPL for playing Wei Legend.

    Handles user input, slash commands, and game output.
    """

    def __init__(self, *, verbose_battles: bool = False) -> None:
        self.verbose_battles = verbose_battles
        self.commands: dict[str, Command] = {}
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all slash commands."""
        commands_list = [
            Command("quit", ["exit", "q"], "保存并退出", self._cmd_quit),
            Command("help", ["?", "h"], "显示命令列表", self._cmd_help),
            Command("status", ["stats", "me"], "查看角色属性", self._cmd_status),
            Command("maps", ["map"], "查看或切换地图：/maps [地图id]", self._cmd_maps),
            Command("fight", ["f"], "在当前地图战斗一场", self._cmd_fight),
            Command("bag", ["b"], "查看背包与已穿戴装备", self._cmd_bag),
            Command("equip", ["e"], "穿戴背包装备：/equip 编号", self._cmd_equip),
            Command("unequip", [], "卸下装备：/unequip 槽位", self._cmd_unequip),
            Command("skills", ["sk"], "查看技能", self._cmd_skills),
            Command("learn", [], "阅读技能书：/learn 技能id", self._cmd_learn),
            Command("train", [], "使用修炼卷轴：/train 技能id", self._cmd_train),
            Command("auto", [], "切换技能自动释放：/auto 技能id", self._cmd_auto),
            Command("shop", [], "查看商店", self._cmd_shop),
            Command("buy", [], "购买道具：/buy 名称 [数量]", self._cmd_buy),
            Command("drink", ["d"], "喝药：/drink 金创药|魔法药", self._cmd_drink),
            Command("potion", [], "自动喝药阈值：/potion 生命% 魔法%", self._cmd_potion),
            Command("strengthen", ["st"], "强化装备：/strengthen 槽位 [nostone]", self._cmd_strengthen),
            Command("oil", [], "给武器涂抹幸运油", self._cmd_oil),
            Command("sell", [], "出售装备：/sell 编号|all|junk", self._cmd_sell),
            Command("sets", [], "查看套装效果", self._cmd_sets),
            Command("idle", [], "挂机：/idle 地图id 分钟", self._cmd_idle),
            Command("save", [], "立即保存", self._cmd_save),
        ]
        for cmd in commands_list:
            self.commands[cmd.name] = cmd
            for alias in cmd.aliases:
                self.commands[alias] = cmd

    # =========================================================================
    # Commands
    # =========================================================================

    def _cmd_quit(self, state: GameState, args: list[str]) -> str | None:
        state.saves.save(state.character)
        state.running = False
        return "江湖路远，后会有期。"

    def _cmd_help(self, state: GameState, args: list[str]) -> str | None:
        lines = ["可用命令：", "-" * 40]
        seen = set()
        for cmd in self.commands.values():
            if cmd.name not in seen:
                aliases = f" ({', '.join(cmd.aliases)})" if cmd.aliases else ""
                lines.append(f"  /{cmd.name}{aliases} - {cmd.description}")
                seen.add(cmd.name)
        return "\n".join(lines)

    def _cmd_status(self, state: GameState, args: list[str]) -> str | None:
        content = state.engine.content
        lines = commands.describe_stats(state.character, content)
        area = content.map_area(state.map_id)
        if area is not None:
            lines.append(f"当前地图：{area.name}")
        inventory = "  ".join(
            f"{item.value}x{state.character.count(item)}" for item in ItemName
        )
        lines.append(f"道具：{inventory}")
        return "\n".join(lines)

    def _cmd_maps(self, state: GameState, args: list[str]) -> str | None:
        content = state.engine.content
        if args:
            area = content.map_area(args[0])
            if area is None:
                return "地图不存在。"
            if state.character.level < area.min_level:
                return f"等级不足，需 Lv.{area.min_level} 才能进入{area.name}。"
            state.map_id = area.id
            return f"已前往【{area.name}】。"
        lines = []
        for area in content.maps:
            marker = "*" if area.id == state.map_id else " "
            locked = "" if state.character.level >= area.min_level else " (未解锁)"
            lines.append(
                f"{marker} {area.id} 【{area.name}】Lv.{area.min_level}-{area.max_level}{locked}"
            )
        return "\n".join(lines)

    def _current_area(self, state: GameState) -> MapArea | None:
        return state.engine.content.map_area(state.map_id)

    def _cmd_fight(self, state: GameState, args: list[str]) -> str | None:
        area = self._current_area(state)
        if area is None:
            return "地图不存在。"
        monster = state.engine.pick_monster(area)
        result = state.engine.run(
            state.character, area, monster, verbose=self.verbose_battles
        )
        header = f"你在【{area.name}】遭遇{'[Boss]' if monster.is_boss else ''}【{monster.name}】。"
        return "\n".join([header, *result.logs])

    def _cmd_bag(self, state: GameState, args: list[str]) -> str | None:
        character = state.character
        lines = ["已穿戴："]
        for slot in SLOT_ORDER:
            item = character.equipments.get(slot)
            lines.append(f"  {slot.value:<14} {format_equipment(item) if item else '-'}")
        lines.append(f"背包（{len(character.bag)} 件）：")
        recommended = commands.recommended_bag_indices(character)
        for index, item in enumerate(character.bag):
            tag = " ★" if index in recommended else ""
            lines.append(f"  [{index}] {format_equipment(item)}{tag}")
        return "\n".join(lines)

    def _cmd_equip(self, state: GameState, args: list[str]) -> str | None:
        index = _parse_int(args[0], -1) if args else -1
        return commands.equip_from_bag(state.character, index, state.engine.content)

    def _cmd_unequip(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "用法：/unequip 槽位"
        return commands.unequip(state.character, args[0], state.engine.content)

    def _cmd_skills(self, state: GameState, args: list[str]) -> str | None:
        return "\n".join(commands.skill_lines(state.character, state.engine.content))

    def _cmd_learn(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "用法：/learn 技能id"
        return commands.learn_skill_by_book(state.character, args[0], state.engine.content)

    def _cmd_train(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "用法：/train 技能id"
        return commands.train_skill_by_scroll(
            state.character, args[0], state.engine.content, state.engine.dice
        )

    def _cmd_auto(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "用法：/auto 技能id"
        return commands.toggle_skill_auto(state.character, args[0], state.engine.content)

    def _cmd_shop(self, state: GameState, args: list[str]) -> str | None:
        lines = [f"金币：{state.character.gold}"]
        for entry in state.engine.content.shop:
            lines.append(f"  {entry.name.value} {entry.price} 金币 - {entry.description}")
        return "\n".join(lines)

    def _cmd_buy(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "用法：/buy 名称 [数量]"
        count = _parse_int(args[1], 1) if len(args) > 1 else 1
        return commands.buy_shop_item(state.character, args[0], count, state.engine.content)

    def _cmd_drink(self, state: GameState, args: list[str]) -> str | None:
        potion = args[0] if args else ItemName.HP_POTION.value
        return commands.use_potion(state.character, potion, state.engine.content)

    def _cmd_potion(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            config = state.character.potion_config
            return (
                f"自动金创药：{'开' if config.auto_hp_enabled else '关'} {config.auto_hp_threshold}%  "
                f"自动魔法药：{'开' if config.auto_mp_enabled else '关'} {config.auto_mp_threshold}%"
            )
        hp = _parse_int(args[0])
        mp = _parse_int(args[1]) if len(args) > 1 else None
        return commands.update_potion_config(
            state.character, auto_hp_threshold=hp, auto_mp_threshold=mp
        )

    def _cmd_strengthen(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "用法：/strengthen 槽位 [nostone]"
        prefer_stone = "nostone" not in args[1:]
        return commands.strengthen(
            state.character, args[0], state.engine.content, state.engine.dice, prefer_stone
        )

    def _cmd_oil(self, state: GameState, args: list[str]) -> str | None:
        return commands.use_lucky_oil(state.character, state.engine.dice)

    def _cmd_sell(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "用法：/sell 编号|all|junk"
        if args[0] == "all":
            return commands.sell_all_equipment(state.character)
        if args[0] == "junk":
            return commands.sell_non_recommended_equipment(state.character)
        index = _parse_int(args[0], -1)
        return commands.sell_equipment(state.character, index)

    def _cmd_sets(self, state: GameState, args: list[str]) -> str | None:
        lines = commands.set_status_lines(state.character, state.engine.content)
        return "\n".join(lines) if lines else "当前未穿戴任何套装。"

    def _cmd_idle(self, state: GameState, args: list[str]) -> str | None:
        map_id = args[0] if args else state.map_id
        minutes = _parse_int(args[1], 30) if len(args) > 1 else 30
        message = state.idle.start(state.character, map_id, minutes)
        if not state.idle.running:
            return message
        while state.idle.process_minute(state.character):
            pass
        summary = state.idle.summary
        lines = [message, state.idle.notice]
        if summary is not None:
            lines.append(summary.describe())
            lines.extend(summary.drops)
        state.saves.save(state.character)
        return "\n".join(lines)

    def _cmd_save(self, state: GameState, args: list[str]) -> str | None:
        state.saves.save(state.character)
        return "存档完成。"

    # =========================================================================
    # Input Handling
    # =========================================================================

    def _is_command(self, text: str) -> bool:
        return text.startswith("/")

    def _parse_command(self, text: str) -> tuple[str, list[str]]:
        parts = text[1:].split()
        if not parts:
            return "", []
        return parts[0].lower(), parts[1:]

    def process_input(self, text: str, state: GameState) -> str:
        """Process one line of user input and return the response."""
        if not self._is_command(text):
            return "请输入以 / 开头的命令，输入 /help 查看全部命令。"
        name, args = self._parse_command(text)
        cmd = self.commands.get(name)
        if cmd is None:
            return f"未知命令：/{name}。输入 /help 查看全部命令。"
        return cmd.handler(state, args) or ""

    def _print_banner(self) -> None:
        print("=" * 40)
        print("        维传奇 · 自动战斗")
        print("=" * 40)
        print("输入 /help 查看命令。\n")

    def build_state(
        self,
        config: EngineConfig,
        name: str,
        profession: Profession,
        seed: int | None = None,
    ) -> GameState:
        """Load the saved character or create a new one, and wire the services."""
        content = DEFAULT_CONTENT
        engine = BattleEngine(content=content, dice=Dice(seed), config=config)
        repository: SaveRepository = (
            JsonFileSaveRepository(config.save_path) if config.save_path else InMemorySaveRepository()
        )
        saves = SaveService(repository=repository, content=content)
        character = saves.load()
        if character is None:
            character = commands.create_character(name, profession, content)
        return GameState(
            engine=engine,
            saves=saves,
            character=character,
            idle=IdleRunner(engine=engine),
            map_id=content.maps[0].id,
        )

    def run(self, state: GameState) -> None:
        """Run the interactive loop until /quit or end of input."""
        self._print_banner()
        print(self.process_input("/status", state))
        print()

        while state.running:
            try:
                user_input = input("> ").strip()
                if not user_input:
                    continue
                response = self.process_input(user_input, state)
                if response:
                    print()
                    print(response)
                    print()
            except (KeyboardInterrupt, EOFError):
                print("\n")
                state.saves.save(state.character)
                state.running = False

        print("感谢游玩！")


def run_game(
    name: str = "",
    profession: Profession = Profession.WARRIOR,
    seed: int | None = None,
    verbose_battles: bool = False,
) -> None:
    """
    Run Wei Legend.

    Args:
        name: Name for a new character; ignored when a save exists
        profession: Class for a new character
        seed: Seed for reproducible battles
        verbose_battles: Print a status header every battle round
    """
    config = EngineConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    repl = GameREPL(verbose_battles=verbose_battles)
    repl.run(repl.build_state(config, name, profession, seed))


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="维传奇 Wei Legend")
    parser.add_argument("--name", default="", help="Character name")
    parser.add_argument(
        "--profession",
        choices=sorted(PROFESSION_ALIASES),
        default="warrior",
        help="Character class",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show a status header every battle round",
    )

    args = parser.parse_args()
    run_game(
        name=args.name,
        profession=PROFESSION_ALIASES[args.profession],
        seed=args.seed,
        verbose_battles=args.verbose,
    )


if __name__ == "__main__":
    main()
