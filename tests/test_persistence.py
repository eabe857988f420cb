"""Tests for saving and defensively restoring characters."""

from __future__ import annotations

import pytest

from weilegend.content import DEFAULT_CONTENT
from weilegend.db.memory import InMemorySaveRepository
from weilegend.engine import BattleEngine
from weilegend.mechanics.dice import Dice
from weilegend.mechanics.stats import derive_stats
from weilegend.models.character import ItemName, Profession
from weilegend.models.equipment import Equipment, EquipmentSlot, Rarity
from weilegend.services.character import create_character
from weilegend.services.persistence import (
    SAVE_VERSION,
    SaveService,
    dump_character,
    hydrate_equipment,
    normalize_slot,
    restore_character,
)

CONTENT = DEFAULT_CONTENT


def _raw(**overrides) -> dict:
    raw = {"name": "存档", "profession": "道士"}
    raw.update(overrides)
    return raw


class TestRejectedSaves:
    """Restoration fails closed on bad identity fields."""

    def test_unknown_profession(self):
        assert restore_character(_raw(profession="忍者"), CONTENT) is None

    @pytest.mark.parametrize("name", [None, 42, ["a"]])
    def test_bad_name(self, name):
        assert restore_character(_raw(name=name), CONTENT) is None

    @pytest.mark.parametrize("raw", [None, "text", 7, [], {"name": "x"}])
    def test_bad_documents(self, raw):
        assert restore_character(raw, CONTENT) is None

    def test_unhashable_profession(self):
        assert restore_character(_raw(profession=["战士"]), CONTENT) is None


class TestRestoreCharacter:
    """Field-by-field defaults and clamps."""

    def test_minimal_save_gets_defaults(self):
        character = restore_character(_raw(), CONTENT)
        assert character is not None
        assert character.profession == Profession.TAOIST
        assert character.level == 1
        assert character.gold == 1200
        assert character.count(ItemName.HP_POTION) == 10
        assert list(character.skills) == ["taoist_talisman"]
        assert character.hp == derive_stats(character, CONTENT.sets).max_hp

    def test_malformed_fields_fall_back(self):
        character = restore_character(
            _raw(level="abc", exp=-5, gold=float("nan"), inventory={"金创药": "many"}, bag="oops"),
            CONTENT,
        )
        assert character.level == 1
        assert character.exp == 0
        assert character.gold == 1200
        assert character.count(ItemName.HP_POTION) == 10
        assert character.bag == []

    def test_hp_and_mp_are_clamped(self):
        character = restore_character(_raw(hp=99_999, mp=-3), CONTENT)
        stats = derive_stats(character, CONTENT.sets)
        assert character.hp == stats.max_hp
        assert character.mp == 0
        assert restore_character(_raw(hp=0), CONTENT).hp == 1

    def test_skills_are_validated(self):
        character = restore_character(
            _raw(
                level=15,
                skills={
                    "taoist_poison": {"level": 3, "training": 20, "auto_use": False},
                    "taoist_pet": {"level": 1},
                    "warrior_charge": {"level": 9},
                },
            ),
            CONTENT,
        )
        assert set(character.skills) == {"taoist_talisman", "taoist_poison"}
        poison = character.skills["taoist_poison"]
        assert (poison.level, poison.training, poison.auto_use) == (3, 20, False)

    def test_skill_books_filtered(self):
        character = restore_character(
            _raw(skill_books={"taoist_pet": 2, "mage_shield": 1, "taoist_heal": 0}), CONTENT
        )
        assert character.skill_books == {"taoist_pet": 2}

    def test_potion_config(self):
        character = restore_character(
            _raw(potionConfig={"autoHpEnabled": False, "autoHpThreshold": 500, "autoMpThreshold": "x"}),
            CONTENT,
        )
        config = character.potion_config
        assert not config.auto_hp_enabled
        assert config.auto_hp_threshold == 95
        assert config.auto_mp_threshold == 25

    def test_camel_case_fields(self):
        character = restore_character(
            _raw(baseLuck=4, skillBooks={"taoist_heal": 1}), CONTENT
        )
        assert character.base_luck == 4
        assert character.skill_books == {"taoist_heal": 1}


class TestEquipmentHydration:
    """Saved items are rebuilt or dropped, never half-built."""

    def test_normalize_slot(self):
        assert normalize_slot("accessory") == EquipmentSlot.NECKLACE
        assert normalize_slot("leftRing") == EquipmentSlot.LEFT_RING
        assert normalize_slot("tail") is None
        assert normalize_slot(3) is None

    def test_hydrate_item(self):
        item = hydrate_equipment(
            {
                "name": "龙纹剑",
                "slot": "weapon",
                "rarity": "稀有",
                "levelReq": 20,
                "attack": 30,
                "attackSpeed": 0.03,
                "strengthen": 4,
                "isElite": True,
                "eliteBonus": {"attack": 5},
                "setId": "berserker",
                "setName": "狂战",
                "setColor": "purple",
            }
        )
        assert item.level_req == 20
        assert item.rarity == Rarity.RARE
        assert item.stat("attack") == 30 + 5 + int(30 * 0.12 * 4)
        assert item.is_elite
        assert item.set_id == "berserker"
        assert item.set_color is None

    @pytest.mark.parametrize(
        "value",
        [
            None,
            {"slot": "weapon", "rarity": "普通"},
            {"name": "剑", "slot": "weapon", "rarity": "传说"},
            {"name": "剑", "slot": "tail", "rarity": "普通"},
        ],
    )
    def test_unusable_items(self, value):
        assert hydrate_equipment(value) is None

    def test_legacy_accessory_slot(self):
        necklace = {"name": "灯笼项链", "slot": "accessory", "rarity": "普通", "luck": 1}
        character = restore_character(_raw(equipments={"accessory": necklace}), CONTENT)
        worn = character.equipments[EquipmentSlot.NECKLACE]
        assert worn is not None
        assert worn.slot == EquipmentSlot.NECKLACE
        assert worn.name == "灯笼项链"

    def test_bad_bag_entries_are_skipped(self):
        bag = [{"name": "靴子", "slot": "boots", "rarity": "精良"}, {"name": 3}, "junk"]
        character = restore_character(_raw(bag=bag), CONTENT)
        assert [item.name for item in character.bag] == ["靴子"]

    def test_negative_stats_are_floored(self):
        item = hydrate_equipment(
            {
                "name": "诅咒铠甲",
                "slot": "armor",
                "rarity": "普通",
                "hp": -100_000,
                "defense": -5,
                "attackSpeed": -0.5,
                "eliteBonus": {"mp": -40, "luck": -3},
            }
        )
        assert (item.hp, item.defense, item.attack_speed) == (0, 0, 0.0)
        assert (item.elite_bonus.mp, item.elite_bonus.luck) == (0, 0)

    def test_corrupt_gear_keeps_character_fightable(self):
        armor = {"name": "诅咒铠甲", "slot": "armor", "rarity": "普通", "hp": -100_000}
        character = restore_character(_raw(equipments={"armor": armor}, hp=50), CONTENT)
        stats = derive_stats(character, CONTENT.sets)
        assert 1 <= character.hp <= stats.max_hp
        assert 0 <= character.mp <= stats.max_mp

        engine = BattleEngine(content=CONTENT, dice=Dice(seed=4))
        area = CONTENT.map_area("bichi_outskirts")
        result = engine.run(character, area, area.monsters[0])
        assert result.rounds >= 1
        assert 0 <= character.hp <= derive_stats(character, CONTENT.sets).max_hp


class TestDumpAndService:
    """Tests for save documents and the save service."""

    def test_dump_restores(self):
        character = create_character("往返", Profession.WARRIOR, CONTENT)
        character.level = 9
        character.gold = 777
        character.skill_books["warrior_charge"] = 1
        character.equipments[EquipmentSlot.WEAPON] = Equipment(
            name="斩马刀", slot=EquipmentSlot.WEAPON, attack=12, strengthen=2
        )
        document = dump_character(character)
        assert document["version"] == SAVE_VERSION

        restored = restore_character(document["character"], CONTENT)
        assert restored.level == 9
        assert restored.gold == 777
        assert restored.skill_books == {"warrior_charge": 1}
        weapon = restored.equipments[EquipmentSlot.WEAPON]
        assert weapon.id == character.equipments[EquipmentSlot.WEAPON].id
        assert weapon.strengthen == 2

    def test_service_round_trip(self):
        repository = InMemorySaveRepository()
        service = SaveService(repository=repository, content=CONTENT)
        assert service.load() is None
        character = create_character("存档", Profession.MAGE, CONTENT)
        service.save(character)
        assert repository.keys() == ["default"]
        loaded = service.load()
        assert loaded.name == "存档"
        assert loaded.profession == Profession.MAGE
        service.delete()
        assert service.load() is None

    def test_service_reads_top_level_saves(self):
        repository = InMemorySaveRepository()
        repository.save("slot1", _raw(level=3))
        loaded = SaveService(repository=repository, content=CONTENT, key="slot1").load()
        assert loaded.level == 3

    def test_service_rejects_bad_saves(self):
        repository = InMemorySaveRepository()
        repository.save("default", {"character": _raw(profession="忍者")})
        assert SaveService(repository=repository, content=CONTENT).load() is None
