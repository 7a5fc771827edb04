"""Culture traits rolled on d66 tables.

Each world gets one trait per category. The d66 code ("3-5") is kept on the
trait so a single category can be re-rolled or audited later.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace

from ..errors import DomainViolationError
from .dice import Dice
from .tables import lookup_code

logger = logging.getLogger(__name__)


class CultureCategory(enum.Enum):
    SOCIAL = "social"
    ECONOMIC = "economic"
    TECHNOLOGICAL = "technological"


def all_d66_codes() -> list[str]:
    """The 36 codes from "1-1" to "6-6", in table order."""
    return [f"{tens}-{ones}" for tens in range(1, 7) for ones in range(1, 7)]


def _d66_table(rows: list[tuple[str, str]]) -> dict[str, tuple[str, str]]:
    return dict(zip(all_d66_codes(), rows, strict=True))


SOCIAL_VALUES_TABLE = _d66_table([
    ("Individualistic", "Personal freedom and autonomy highly valued"),
    ("Collectivist", "Group harmony and consensus prioritized"),
    ("Hierarchical", "Strict social order and respect for authority"),
    ("Egalitarian", "Equality and fairness emphasized"),
    ("Meritocratic", "Achievement and capability determine status"),
    ("Traditional", "Ancient customs and heritage preserved"),
    ("Progressive", "Innovation and change embraced"),
    ("Religious", "Faith and spirituality central to life"),
    ("Secular", "Reason and science guide decisions"),
    ("Militaristic", "Martial prowess and discipline honored"),
    ("Pacifistic", "Non-violence and diplomacy preferred"),
    ("Pragmatic", "Practical solutions over ideals"),
    ("Idealistic", "High principles and moral standards"),
    ("Competitive", "Rivalry and striving for excellence"),
    ("Cooperative", "Mutual aid and collaboration valued"),
    ("Isolationist", "Self-sufficiency and privacy preferred"),
    ("Cosmopolitan", "Diversity and external contact welcomed"),
    ("Xenophobic", "Outsiders viewed with suspicion"),
    ("Hospitable", "Strangers treated with warmth"),
    ("Scholarly", "Knowledge and learning revered"),
    ("Anti-intellectual", "Practical skills over book learning"),
    ("Artistic", "Creative expression celebrated"),
    ("Utilitarian", "Function over form"),
    ("Hedonistic", "Pleasure and enjoyment prioritized"),
    ("Ascetic", "Simplicity and self-denial practiced"),
    ("Materialistic", "Wealth and possessions valued"),
    ("Environmentalist", "Nature and ecology protected"),
    ("Expansionist", "Growth and territorial ambition"),
    ("Fatalistic", "Acceptance of destiny and fate"),
    ("Ambitious", "Drive to improve and advance"),
    ("Conservative", "Cautious and risk-averse"),
    ("Adventurous", "Bold and willing to take chances"),
    ("Communitarian", "Strong community bonds"),
    ("Nomadic", "Mobile and adaptable lifestyle"),
    ("Settled", "Attachment to place and roots"),
    ("Syncretic", "Blending multiple traditions"),
])

ECONOMIC_FOCUS_TABLE = _d66_table([
    ("Agricultural", "Farming and food production"),
    ("Industrial", "Manufacturing and production"),
    ("Post-Industrial", "Services and information"),
    ("Resource Extraction", "Mining and harvesting"),
    ("Trading Hub", "Commerce and exchange"),
    ("Financial", "Banking and investment"),
    ("Technology Sector", "Innovation and R&D"),
    ("Tourism", "Hospitality and entertainment"),
    ("Military-Industrial", "Defense production"),
    ("Subsistence", "Basic needs only"),
    ("Artisanal", "Crafts and specialty goods"),
    ("Intellectual Property", "Ideas and patents"),
    ("Energy Production", "Power generation"),
    ("Pharmaceutical", "Medicine and biotech"),
    ("Entertainment", "Media and arts"),
    ("Education", "Training and knowledge"),
    ("Transportation", "Shipping and logistics"),
    ("Communication", "Networks and data"),
    ("Construction", "Building and infrastructure"),
    ("Recycling", "Waste processing"),
    ("Luxury Goods", "High-end products"),
    ("Food Processing", "Cuisine and beverages"),
    ("Textile", "Clothing and fabrics"),
    ("Shipbuilding", "Spacecraft construction"),
    ("Research", "Scientific exploration"),
    ("Healthcare", "Medical services"),
    ("Legal Services", "Law and justice"),
    ("Security", "Protection and defense"),
    ("Gambling", "Gaming and chance"),
    ("Black Market", "Underground economy"),
    ("Religious Services", "Faith-based activities"),
    ("Genetic Engineering", "Biological modification"),
    ("Cybernetics", "Human-machine integration"),
    ("Virtual Reality", "Simulated environments"),
    ("Terraforming", "World modification"),
    ("Mixed Economy", "Diversified activities"),
])

TECH_ATTITUDE_TABLE = _d66_table([
    ("Technophile", "Embraces all new technology"),
    ("Technophobe", "Rejects modern technology"),
    ("Balanced", "Pragmatic tech adoption"),
    ("Selective", "Careful technology choices"),
    ("Traditional Methods", "Prefers old ways"),
    ("Cutting Edge", "Always seeks latest tech"),
    ("Bio-focused", "Biological over mechanical"),
    ("Cyber-focused", "Digital and robotic preference"),
    ("Regulated", "Strict tech controls"),
    ("Laissez-faire", "Minimal tech restrictions"),
    ("Militarized", "Tech for defense priority"),
    ("Medical Priority", "Health tech emphasized"),
    ("Environmental Tech", "Eco-friendly solutions"),
    ("Exploitative", "Tech without regard for cost"),
    ("Artisanal Tech", "Handcrafted devices"),
    ("Mass Production", "Standardized tech"),
    ("Open Source", "Shared technology"),
    ("Proprietary", "Protected tech secrets"),
    ("AI Integration", "Artificial intelligence common"),
    ("AI Prohibition", "No artificial minds"),
    ("Augmentation", "Human enhancement accepted"),
    ("Purist", "Unmodified biology valued"),
    ("Automation", "Robots do most work"),
    ("Manual Labor", "Human work preferred"),
    ("Nanotech", "Molecular-scale engineering"),
    ("Quantum Tech", "Quantum computing focus"),
    ("Psionic", "Mental powers developed"),
    ("Anti-Psionic", "Mental powers forbidden"),
    ("Fusion Power", "Clean energy abundant"),
    ("Renewable Focus", "Sustainable energy only"),
    ("Archeotech", "Ancient technology revered"),
    ("Experimental", "Risky tech testing"),
    ("Conservative Tech", "Proven methods only"),
    ("Scavenged", "Salvaged and repurposed"),
    ("Imported", "Tech from off-world"),
    ("Indigenous", "Locally developed tech"),
])

CULTURE_TABLES: dict[CultureCategory, dict[str, tuple[str, str]]] = {
    CultureCategory.SOCIAL: SOCIAL_VALUES_TABLE,
    CultureCategory.ECONOMIC: ECONOMIC_FOCUS_TABLE,
    CultureCategory.TECHNOLOGICAL: TECH_ATTITUDE_TABLE,
}

CATEGORY_ORDER = [CultureCategory.SOCIAL, CultureCategory.ECONOMIC, CultureCategory.TECHNOLOGICAL]


@dataclass(frozen=True)
class CultureTrait:
    category: CultureCategory
    trait: str
    description: str
    code: str  # Originating d66 code

    def formatted(self) -> str:
        return f"{self.trait}: {self.description}"


@dataclass(frozen=True)
class CultureRecord:
    world_id: str
    social: CultureTrait
    economic: CultureTrait
    technological: CultureTrait

    def traits(self) -> list[CultureTrait]:
        return [self.social, self.economic, self.technological]


@dataclass
class CultureOptions:
    world_id: str
    social_code: str | None = None
    economic_code: str | None = None
    technological_code: str | None = None


def culture_trait_from_code(category: CultureCategory, code: str) -> CultureTrait:
    """Map a d66 code to its trait in the given category's table."""
    trait, description = lookup_code(CULTURE_TABLES[category], code, f"{category.value} culture")
    return CultureTrait(category=category, trait=trait, description=description, code=code)


def generate_culture_trait(dice: Dice, category: CultureCategory) -> CultureTrait:
    """Roll one d66 trait for a category."""
    return culture_trait_from_code(category, dice.roll_d66())


def roll_culture_traits(
    dice: Dice, codes: tuple[str | None, str | None, str | None] = (None, None, None),
) -> list[CultureTrait]:
    """Social, economic and technological traits, using any fixed codes given."""
    traits = []
    for category, code in zip(CATEGORY_ORDER, codes, strict=True):
        if code is None:
            traits.append(generate_culture_trait(dice, category))
        else:
            traits.append(culture_trait_from_code(category, code))
    return traits


def generate_culture(dice: Dice, options: CultureOptions) -> CultureRecord:
    social, economic, technological = roll_culture_traits(
        dice, (options.social_code, options.economic_code, options.technological_code),
    )
    logger.debug(
        "Culture for %s: %s/%s/%s", options.world_id, social.trait, economic.trait, technological.trait,
    )
    return CultureRecord(
        world_id=options.world_id, social=social, economic=economic, technological=technological,
    )


def reroll_culture_trait(dice: Dice, culture: CultureRecord, category: CultureCategory) -> CultureRecord:
    """A copy of ``culture`` with one category freshly rolled."""
    if not isinstance(category, CultureCategory):
        raise DomainViolationError(f"Unknown culture category {category!r}")
    return replace(culture, **{category.value: generate_culture_trait(dice, category)})


def format_culture_traits(culture: CultureRecord) -> list[str]:
    return [trait.formatted() for trait in culture.traits()]
