"""
Default Content Catalogue for Wei Legend.

Provides the built-in skills, equipment sets, hunting grounds, and shop
list that the engine and services consume as read-only reference data.
"""

from __future__ import annotations

from weilegend.models import (
    EquipmentSlot,
    GameContent,
    ItemName,
    MapArea,
    MonsterTemplate,
    Profession,
    SetTemplate,
    SetTier,
    ShopItem,
    SkillKind,
    SkillTemplate,
    StatBonus,
    StrikeProfile,
)

S = EquipmentSlot


# =============================================================================
# Skills
# =============================================================================


def _warrior_skills() -> list[SkillTemplate]:
    return [
        SkillTemplate(
            id="warrior_attack_slash",
            name="攻杀剑术",
            book_name="攻杀剑术秘籍",
            profession=Profession.WARRIOR,
            unlock_level=1,
            kind=SkillKind.ATTACK,
            mana_cost=6,
            cooldown=1,
            description="蓄势一击，剑气压线推进。",
            base_power=16,
            scaling=1.05,
            strike=StrikeProfile(
                flavor="【{name}】你短暂蓄势后斜斩而下，剑气挟风压线推进，造成 {damage} 点伤害。",
                crit_multiplier=1.3,
            ),
        ),
        SkillTemplate(
            id="warrior_charge",
            name="野蛮冲撞",
            book_name="野蛮冲撞秘籍",
            profession=Profession.WARRIOR,
            unlock_level=7,
            kind=SkillKind.ATTACK,
            mana_cost=14,
            cooldown=3,
            description="沉肩突进，撞开对手后补上一击。",
            base_power=30,
            scaling=1.2,
            strike=StrikeProfile(
                flavor="【{name}】你沉肩突进把对手撞得踉跄，随即补上一击，共造成 {damage} 点冲撞伤害。",
                crit_multiplier=1.35,
            ),
        ),
        SkillTemplate(
            id="warrior_half_moon",
            name="半月弯刀",
            book_name="半月弯刀秘籍",
            profession=Profession.WARRIOR,
            unlock_level=19,
            kind=SkillKind.ATTACK,
            mana_cost=22,
            cooldown=2,
            description="横刀回旋，弧光连段。",
            base_power=42,
            scaling=1.35,
            strike=StrikeProfile(
                flavor="【{name}】你横刀回旋，半月弧光炸开，斩出 {damage} 点连段伤害。",
                crit_multiplier=1.4,
            ),
        ),
        SkillTemplate(
            id="warrior_fire_sword",
            name="烈火剑法",
            book_name="烈火剑法秘籍",
            profession=Profession.WARRIOR,
            unlock_level=28,
            kind=SkillKind.ATTACK,
            mana_cost=34,
            cooldown=4,
            description="烈焰附剑，一剑贯胸。",
            base_power=80,
            scaling=1.8,
            strike=StrikeProfile(
                flavor="【{name}】烈焰缠绕剑身，你一剑劈落，造成 {damage} 点火焰伤害。",
                crit_flavor=(
                    "【{name}】烈焰顺着剑脊爆燃，你踏步前压一剑贯胸，"
                    "触发烈火暴击，造成 {damage} 点爆裂伤害！"
                ),
                crit_multiplier=1.45,
                crit_base=0.08,
            ),
        ),
    ]


def _mage_skills() -> list[SkillTemplate]:
    return [
        SkillTemplate(
            id="mage_fireball",
            name="火球术",
            book_name="火球术",
            profession=Profession.MAGE,
            unlock_level=1,
            kind=SkillKind.ATTACK,
            mana_cost=10,
            cooldown=0,
            description="凝聚火球砸向目标。",
            base_power=18,
            scaling=1.1,
            strike=StrikeProfile(
                flavor="【{name}】炽热火球拖出红光轨迹，精准砸中目标，造成 {damage} 点火焰伤害。",
                crit_multiplier=1.3,
            ),
        ),
        SkillTemplate(
            id="mage_shield",
            name="魔法盾",
            book_name="魔法盾",
            profession=Profession.MAGE,
            unlock_level=14,
            kind=SkillKind.SHIELD,
            mana_cost=30,
            cooldown=8,
            description="以魔力护体，大幅减免伤害。",
            base_power=40,
            scaling=0.5,
            duration=4,
            cast_text="【{name}】你抬手结印，半透明护盾笼罩全身，将在 {rounds} 回合内显著减伤。",
        ),
        SkillTemplate(
            id="mage_thunder",
            name="雷电术",
            book_name="雷电术",
            profession=Profession.MAGE,
            unlock_level=17,
            kind=SkillKind.ATTACK,
            mana_cost=24,
            cooldown=1,
            description="召来雷柱，有几率令目标破绽大露。",
            base_power=45,
            scaling=1.4,
            strike=StrikeProfile(
                flavor="【{name}】乌云压顶，雷柱直落命中目标，造成 {damage} 点雷系伤害。",
                crit_multiplier=1.4,
                shock_chance=0.25,
                shock_text="雷电麻痹了目标动作，下次普通攻击更容易打出重击。",
            ),
        ),
        SkillTemplate(
            id="mage_blizzard",
            name="冰咆哮",
            book_name="冰咆哮",
            profession=Profession.MAGE,
            unlock_level=30,
            kind=SkillKind.ATTACK,
            mana_cost=48,
            cooldown=3,
            description="冰风怒卷，冰锥切割。",
            base_power=85,
            scaling=1.85,
            strike=StrikeProfile(
                flavor="【{name}】冰风怒卷，锋利冰锥持续切割目标，造成 {damage} 点寒霜伤害。",
                crit_multiplier=1.55,
            ),
        ),
    ]


def _taoist_skills() -> list[SkillTemplate]:
    return [
        SkillTemplate(
            id="taoist_talisman",
            name="灵魂火符",
            book_name="灵魂火符",
            profession=Profession.TAOIST,
            unlock_level=1,
            kind=SkillKind.ATTACK,
            mana_cost=9,
            cooldown=0,
            description="符纸化作幽光箭矢。",
            base_power=16,
            scaling=1.05,
            strike=StrikeProfile(
                flavor="【{name}】符纸化作幽光箭矢破空而去，在目标胸前炸裂，造成 {damage} 点法术伤害。",
                crit_multiplier=1.35,
            ),
        ),
        SkillTemplate(
            id="taoist_heal",
            name="治愈术",
            book_name="治愈术",
            profession=Profession.TAOIST,
            unlock_level=7,
            kind=SkillKind.HEAL,
            mana_cost=18,
            cooldown=3,
            description="白光缠绕，迅速愈合伤势。",
            base_power=40,
            scaling=0.55,
            cast_text="【{name}】温润白光层层缠绕，你的伤势快速收拢，恢复 {amount} 点生命。",
        ),
        SkillTemplate(
            id="taoist_poison",
            name="施毒术",
            book_name="施毒术",
            profession=Profession.TAOIST,
            unlock_level=14,
            kind=SkillKind.POISON,
            mana_cost=16,
            cooldown=4,
            description="毒符入体，持续侵蚀。",
            base_power=8,
            scaling=0.26,
            duration=5,
            cast_text=(
                "【{name}】毒符没入敌体，黑雾沿血脉扩散，"
                "接下来 {rounds} 回合每回合受到 {amount} 点毒伤。"
            ),
        ),
        SkillTemplate(
            id="taoist_pet",
            name="召唤神兽",
            book_name="召唤神兽",
            profession=Profession.TAOIST,
            unlock_level=22,
            kind=SkillKind.SUMMON,
            mana_cost=40,
            cooldown=10,
            description="召来神兽协同作战。",
            base_power=20,
            scaling=0.24,
            duration=6,
            cast_text="【{name}】法阵震鸣，神兽踏火降临，将在 {rounds} 回合内持续撕咬敌人。",
        ),
    ]


# =============================================================================
# Sets
# =============================================================================


def _sets() -> list[SetTemplate]:
    return [
        SetTemplate(
            id="berserker",
            name="狂战",
            color="crimson",
            profession=Profession.WARRIOR,
            grade="entry",
            slots=[S.WEAPON, S.ARMOR, S.HELMET, S.BELT, S.BOOTS],
            piece_names={
                S.WEAPON: "狂战之刃",
                S.ARMOR: "狂战铠甲",
                S.HELMET: "狂战头盔",
                S.BELT: "狂战腰带",
                S.BOOTS: "狂战战靴",
            },
            tiers=[
                SetTier(pieces=2, bonus=StatBonus(attack=6), label="狂怒"),
                SetTier(pieces=3, bonus=StatBonus(hp=80, defense=6), label="坚韧"),
                SetTier(
                    pieces=5,
                    bonus=StatBonus(attack_speed=0.08, crit_rate=0.05, lifesteal=0.04),
                    label="嗜血",
                ),
            ],
        ),
        SetTemplate(
            id="holy_war",
            name="圣战",
            color="amber",
            profession=Profession.WARRIOR,
            grade="advanced",
            slots=[S.HELMET, S.NECKLACE, S.LEFT_BRACELET, S.RIGHT_BRACELET, S.LEFT_RING, S.RIGHT_RING],
            piece_names={
                S.HELMET: "圣战头盔",
                S.NECKLACE: "圣战项链",
                S.LEFT_BRACELET: "圣战手镯",
                S.RIGHT_BRACELET: "圣战手镯",
                S.LEFT_RING: "圣战戒指",
                S.RIGHT_RING: "圣战戒指",
            },
            tiers=[
                SetTier(pieces=2, bonus=StatBonus(attack=10), label="圣威"),
                SetTier(pieces=4, bonus=StatBonus(crit_rate=0.06, defense=10), label="破军"),
                SetTier(pieces=6, bonus=StatBonus(attack_speed=0.1, lifesteal=0.06), label="战神"),
            ],
        ),
        SetTemplate(
            id="spirit_jade",
            name="灵玉",
            color="azure",
            profession=Profession.MAGE,
            grade="entry",
            slots=[S.WEAPON, S.ARMOR, S.HELMET, S.NECKLACE, S.BOOTS],
            piece_names={
                S.WEAPON: "灵玉法杖",
                S.ARMOR: "灵玉法袍",
                S.HELMET: "灵玉法冠",
                S.NECKLACE: "灵玉坠饰",
                S.BOOTS: "灵玉云靴",
            },
            tiers=[
                SetTier(pieces=2, bonus=StatBonus(magic=6), label="聚灵"),
                SetTier(pieces=3, bonus=StatBonus(mp=90, defense=4), label="护魂"),
                SetTier(pieces=5, bonus=StatBonus(attack_speed=0.06, crit_rate=0.06), label="灵涌"),
            ],
        ),
        SetTemplate(
            id="arch_mage",
            name="法神",
            color="amber",
            profession=Profession.MAGE,
            grade="advanced",
            slots=[S.HELMET, S.NECKLACE, S.LEFT_BRACELET, S.RIGHT_BRACELET, S.LEFT_RING, S.RIGHT_RING],
            piece_names={
                S.HELMET: "法神头盔",
                S.NECKLACE: "法神项链",
                S.LEFT_BRACELET: "法神手镯",
                S.RIGHT_BRACELET: "法神手镯",
                S.LEFT_RING: "法神戒指",
                S.RIGHT_RING: "法神戒指",
            },
            tiers=[
                SetTier(pieces=2, bonus=StatBonus(magic=10), label="法源"),
                SetTier(pieces=4, bonus=StatBonus(crit_rate=0.07, mp=120), label="奥义"),
                SetTier(pieces=6, bonus=StatBonus(attack_speed=0.1, lifesteal=0.05), label="法神"),
            ],
        ),
        SetTemplate(
            id="talisman",
            name="灵符",
            color="jade",
            profession=Profession.TAOIST,
            grade="entry",
            slots=[S.WEAPON, S.ARMOR, S.HELMET, S.BELT, S.BOOTS],
            piece_names={
                S.WEAPON: "灵符剑",
                S.ARMOR: "灵符道袍",
                S.HELMET: "灵符道冠",
                S.BELT: "灵符束带",
                S.BOOTS: "灵符布靴",
            },
            tiers=[
                SetTier(pieces=2, bonus=StatBonus(tao=6), label="符引"),
                SetTier(pieces=3, bonus=StatBonus(hp=60, mp=50), label="养气"),
                SetTier(pieces=5, bonus=StatBonus(attack_speed=0.06, lifesteal=0.05), label="通玄"),
            ],
        ),
        SetTemplate(
            id="heavenly_lord",
            name="天尊",
            color="amber",
            profession=Profession.TAOIST,
            grade="advanced",
            slots=[S.HELMET, S.NECKLACE, S.LEFT_BRACELET, S.RIGHT_BRACELET, S.LEFT_RING, S.RIGHT_RING],
            piece_names={
                S.HELMET: "天尊道冠",
                S.NECKLACE: "天尊项链",
                S.LEFT_BRACELET: "天尊手镯",
                S.RIGHT_BRACELET: "天尊手镯",
                S.LEFT_RING: "天尊戒指",
                S.RIGHT_RING: "天尊戒指",
            },
            tiers=[
                SetTier(pieces=2, bonus=StatBonus(tao=10), label="道心"),
                SetTier(pieces=4, bonus=StatBonus(defense=10, hp=100), label="天佑"),
                SetTier(pieces=6, bonus=StatBonus(attack_speed=0.1, crit_rate=0.06), label="天尊"),
            ],
        ),
        SetTemplate(
            id="meteor",
            name="流星",
            color="jade",
            grade="entry",
            slots=[S.NECKLACE, S.LEFT_RING, S.RIGHT_RING],
            piece_names={
                S.NECKLACE: "流星项链",
                S.LEFT_RING: "流星戒指",
                S.RIGHT_RING: "流星戒指",
            },
            tiers=[
                SetTier(pieces=2, bonus=StatBonus(luck=1), label="追星"),
                SetTier(pieces=3, bonus=StatBonus(luck=1, attack_speed=0.04), label="流光"),
            ],
        ),
    ]


# =============================================================================
# Maps
# =============================================================================


def _monster(
    id: str,
    name: str,
    level: int,
    hp: int,
    attack: int,
    defense: int,
    exp: int,
    gold: int,
    skill_text: str,
    is_boss: bool = False,
) -> MonsterTemplate:
    return MonsterTemplate(
        id=id,
        name=name,
        level=level,
        hp=hp,
        attack=attack,
        defense=defense,
        exp=exp,
        gold=gold,
        skill_text=skill_text,
        is_boss=is_boss,
    )


def _maps() -> list[MapArea]:
    return [
        MapArea(
            id="bichi_outskirts",
            name="比奇郊外",
            min_level=1,
            max_level=10,
            drop_tier=1,
            monsters=[
                _monster("scarecrow", "稻草人", 1, 60, 8, 2, 12, 10, "稻草人挥舞着破旧的木杆抽来。"),
                _monster("hen", "鸡", 1, 40, 6, 0, 8, 6, "鸡扑腾着翅膀猛啄你的小腿。"),
                _monster("deer", "鹿", 3, 110, 14, 4, 22, 16, "鹿低头用犄角狠狠顶来。"),
                _monster("rake_cat", "钉耙猫", 5, 170, 22, 6, 38, 26, "钉耙猫抡起钉耙横扫而来。"),
            ],
            bosses=[
                _monster(
                    "hook_cat_king", "多钩猫王", 8, 520, 34, 10, 160, 150,
                    "多钩猫王甩出铁钩，带起一串血花。", is_boss=True,
                ),
            ],
        ),
        MapArea(
            id="skeleton_cave",
            name="骷髅洞",
            min_level=8,
            max_level=20,
            drop_tier=2,
            monsters=[
                _monster("skeleton", "骷髅", 10, 300, 38, 12, 70, 48, "骷髅挥动骨刀劈砍而下。"),
                _monster("skeleton_warrior", "骷髅战士", 13, 420, 48, 16, 96, 64, "骷髅战士举盾冲撞，骨刃紧随其后。"),
                _monster("skeleton_general", "骷髅战将", 16, 560, 58, 20, 128, 82, "骷髅战将双斧交错斩落。"),
            ],
            bosses=[
                _monster(
                    "skeleton_spirit", "骷髅精灵", 20, 1800, 80, 28, 620, 520,
                    "骷髅精灵召唤骨刺从地底穿出。", is_boss=True,
                ),
            ],
        ),
        MapArea(
            id="woma_temple",
            name="沃玛寺庙",
            min_level=16,
            max_level=28,
            drop_tier=3,
            monsters=[
                _monster("woma_warrior", "沃玛战士", 18, 700, 70, 26, 170, 110, "沃玛战士挥舞巨斧劈下。"),
                _monster("fire_woma", "火焰沃玛", 21, 820, 82, 30, 205, 130, "火焰沃玛喷吐出一团烈焰。"),
                _monster("woma_guard", "沃玛卫士", 24, 960, 92, 36, 240, 150, "沃玛卫士以长戟连刺三下。"),
            ],
            bosses=[
                _monster(
                    "woma_lord", "沃玛教主", 28, 3600, 128, 46, 1200, 980,
                    "沃玛教主双掌推出灼热光波。", is_boss=True,
                ),
            ],
        ),
        MapArea(
            id="zuma_temple",
            name="祖玛寺庙",
            min_level=24,
            max_level=36,
            drop_tier=4,
            monsters=[
                _monster("zuma_archer", "祖玛弓箭手", 26, 1050, 104, 38, 290, 180, "祖玛弓箭手拉满长弓，箭矢破空而至。"),
                _monster("zuma_statue", "祖玛雕像", 29, 1240, 116, 46, 340, 210, "祖玛雕像石锤砸地，震波翻涌。"),
                _monster("zuma_guard", "祖玛卫士", 32, 1420, 128, 52, 395, 240, "祖玛卫士挥动巨刃斜劈。"),
            ],
            bosses=[
                _monster(
                    "zuma_lord", "祖玛教主", 36, 5600, 170, 64, 2100, 1600,
                    "祖玛教主召唤雷火从天而降。", is_boss=True,
                ),
            ],
        ),
        MapArea(
            id="red_moon_canyon",
            name="赤月峡谷",
            min_level=33,
            max_level=50,
            drop_tier=5,
            monsters=[
                _monster("blood_zombie", "血僵尸", 34, 1700, 144, 58, 470, 280, "血僵尸扑来撕咬，腥风扑面。"),
                _monster("twin_head_demon", "双头血魔", 38, 2100, 162, 66, 560, 330, "双头血魔两口齐喷血雾。"),
                _monster("moon_spider", "月魔蜘蛛", 42, 2500, 180, 74, 660, 380, "月魔蜘蛛吐出剧毒蛛丝缠身。"),
            ],
            bosses=[
                _monster(
                    "red_moon_demon", "赤月恶魔", 48, 9800, 236, 92, 4200, 3200,
                    "赤月恶魔张开巨口，血红光柱横扫战场。", is_boss=True,
                ),
            ],
        ),
    ]


# =============================================================================
# Shop & Catalogue
# =============================================================================


def _shop() -> list[ShopItem]:
    return [
        ShopItem(name=ItemName.HP_POTION, price=60, description="战斗中恢复 35% 生命 +70。"),
        ShopItem(name=ItemName.MP_POTION, price=70, description="战斗中恢复 35% 魔法 +60。"),
        ShopItem(name=ItemName.TRAINING_SCROLL, price=320, description="为指定技能增加 45-70 点修炼值。"),
        ShopItem(name=ItemName.STRENGTHEN_STONE, price=480, description="强化时成功率 +12%。"),
        ShopItem(name=ItemName.LUCKY_OIL, price=900, description="有几率为武器增加 1 点幸运。"),
    ]


INITIAL_ITEMS: dict[ItemName, int] = {
    ItemName.HP_POTION: 10,
    ItemName.MP_POTION: 10,
    ItemName.TRAINING_SCROLL: 2,
    ItemName.STRENGTHEN_STONE: 1,
    ItemName.LUCKY_OIL: 0,
}


def build_default_content() -> GameContent:
    """Assemble the built-in catalogue."""
    skills = [*_warrior_skills(), *_mage_skills(), *_taoist_skills()]
    return GameContent(
        skills={skill.id: skill for skill in skills},
        sets=_sets(),
        maps=_maps(),
        shop=_shop(),
        initial_items=dict(INITIAL_ITEMS),
    )


DEFAULT_CONTENT = build_default_content()
