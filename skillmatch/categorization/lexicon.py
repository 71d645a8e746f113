"""Category lexicon: the static, versioned configuration behind skill classification.

A lexicon maps each category to weighted keyword/phrase triggers and carries
the tuning constants the Categorizer needs:

- acceptance_threshold (tau): minimum normalized score a category must reach;
  anything lower classifies as "Other".
- saturation (per category): raw score at which confidence reaches 1.0.
  With the default of 1.0 a single strong keyword is enough for full confidence.
- stem_min_length: single-word keywords at least this long also match as a
  token prefix ("garden" matches "gardening").
- priority: explicit tie-break order; the earlier category wins a tie.

The built-in DEFAULT_LEXICON_DATA can be replaced by a YAML file with the same shape
(see load_lexicon). Either way the lexicon is built once at startup and shared
read-only; all models here are frozen.

Keyword weight tiers used by the default lexicon:
    1.0  the skill itself or an unambiguous tool ("python", "guitar", "yoga")
    0.6  strongly associated vocabulary ("design", "recipe", "workout")
    0.3  weak hints that also show up elsewhere ("digital", "rock", "landscape")
    0.15 "theory" alone, which on its own must stay below the threshold
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from skillmatch.config.exceptions import ConfigurationError
from skillmatch.domain.models import OTHER_CATEGORY
from skillmatch.utils.text import normalize_skill_name, tokenize

DEFAULT_ACCEPTANCE_THRESHOLD = 0.2
DEFAULT_SATURATION = 1.0
DEFAULT_STEM_MIN_LENGTH = 4


class KeywordTrigger(BaseModel):
    """A keyword or multi-word phrase and the weight it adds to its category."""

    phrase: str = Field(..., min_length=1)
    weight: float = Field(..., gt=0.0, le=10.0)

    model_config = {"frozen": True}

    @field_validator("phrase")
    @classmethod
    def normalize_phrase(cls, v: str) -> str:
        """Store phrases in normalized form so they compare against normalized names."""
        normalized = normalize_skill_name(v)
        if not normalized:
            raise ValueError(f"Keyword '{v}' is empty after normalization")
        return normalized

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(tokenize(self.phrase))


class CategoryDefinition(BaseModel):
    """A category name with its ordered keyword triggers."""

    name: str = Field(..., min_length=1)
    keywords: Tuple[KeywordTrigger, ...] = Field(..., min_length=1)
    saturation: float = Field(DEFAULT_SATURATION, gt=0.0)

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Category name cannot be empty or whitespace-only")
        if stripped.casefold() == OTHER_CATEGORY.casefold():
            raise ValueError(f"'{OTHER_CATEGORY}' is the reserved fallback category")
        return stripped

    @field_validator("keywords")
    @classmethod
    def unique_phrases(cls, v: Tuple[KeywordTrigger, ...]) -> Tuple[KeywordTrigger, ...]:
        seen = set()
        for trigger in v:
            if trigger.phrase in seen:
                raise ValueError(f"Duplicate keyword '{trigger.phrase}'")
            seen.add(trigger.phrase)
        return v


class CategoryLexicon(BaseModel):
    """The complete, immutable category configuration."""

    version: str = Field(..., min_length=1)
    categories: Tuple[CategoryDefinition, ...] = Field(..., min_length=1)
    priority: Tuple[str, ...] = Field(..., description="Tie-break order, highest priority first")
    acceptance_threshold: float = Field(DEFAULT_ACCEPTANCE_THRESHOLD, gt=0.0, le=1.0)
    stem_min_length: int = Field(DEFAULT_STEM_MIN_LENGTH, ge=2)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_categories(self):
        names = [category.name for category in self.categories]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate categories: {', '.join(duplicates)}")

        if len(set(self.priority)) != len(self.priority):
            raise ValueError("priority lists a category more than once")

        missing = sorted(set(names) - set(self.priority))
        unknown = sorted(set(self.priority) - set(names))
        if missing:
            raise ValueError(f"priority is missing categories: {', '.join(missing)}")
        if unknown:
            raise ValueError(f"priority names unknown categories: {', '.join(unknown)}")

        return self

    @property
    def category_names(self) -> List[str]:
        """Configured category names in priority order (the fallback excluded)."""
        return list(self.priority)

    def priority_rank(self, category: str) -> int:
        """Position of a category in the tie-break order (lower wins)."""
        return self.priority.index(category)

    def get(self, name: str) -> Optional[CategoryDefinition]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def with_threshold(self, threshold: Optional[float]) -> "CategoryLexicon":
        """Return a copy using a different acceptance threshold (None keeps the current one)."""
        if threshold is None:
            return self
        if not 0.0 < threshold <= 1.0:
            raise ValueError(f"acceptance_threshold must be in (0, 1], got {threshold}")
        return self.model_copy(update={"acceptance_threshold": threshold})


def _category(name: str, keywords: Dict[str, float], saturation: float = DEFAULT_SATURATION) -> Dict[str, Any]:
    return {
        "name": name,
        "saturation": saturation,
        "keywords": [{"phrase": phrase, "weight": weight} for phrase, weight in keywords.items()],
    }


DEFAULT_LEXICON_DATA: Dict[str, Any] = {
    "version": "1.0",
    "acceptance_threshold": DEFAULT_ACCEPTANCE_THRESHOLD,
    "stem_min_length": DEFAULT_STEM_MIN_LENGTH,
    "priority": [
        "Technology",
        "Music",
        "Photography",
        "Culinary",
        "Languages",
        "Fitness",
        "Wellness",
        "Gardening",
        "DIY & Crafts",
        "Creative Arts",
        "Business",
        "Academic",
    ],
    "categories": [
        _category("Technology", {
            "programming": 1.0, "coding": 1.0, "software": 1.0, "javascript": 1.0,
            "typescript": 1.0, "python": 1.0, "java": 1.0, "react": 1.0, "angular": 1.0,
            "vue": 1.0, "node js": 1.0, "html": 1.0, "css": 1.0, "sql": 1.0, "mongodb": 1.0,
            "aws": 1.0, "azure": 1.0, "docker": 1.0, "kubernetes": 1.0, "git": 1.0,
            "devops": 1.0, "machine learning": 1.0, "artificial intelligence": 1.0,
            "cybersecurity": 1.0, "blockchain": 1.0, "web development": 1.0,
            "data science": 1.0, "development": 0.6, "backend": 0.6, "frontend": 0.6,
            "fullstack": 0.6, "database": 0.6, "cloud": 0.6, "api": 0.6, "ai": 0.6,
            "app": 0.6, "website": 0.6, "code": 0.6, "data": 0.3, "web": 0.3,
            "mobile": 0.3, "game": 0.3, "digital": 0.3, "tech": 0.3,
        }),
        _category("Creative Arts", {
            "graphic design": 1.0, "illustration": 1.0, "animation": 1.0, "painting": 1.0,
            "drawing": 1.0, "sketching": 1.0, "photoshop": 1.0, "illustrator": 1.0,
            "figma": 1.0, "calligraphy": 1.0, "typography": 1.0, "watercolor": 1.0,
            "ui design": 1.0, "ux design": 1.0, "design": 0.6, "graphic": 0.6, "art": 0.6,
            "arts": 0.6, "paint": 0.6, "draw": 0.6, "sketch": 0.6, "canvas": 0.6,
            "acrylic": 0.6, "color theory": 0.6, "branding": 0.6, "logo": 0.6,
            "creative": 0.3, "visual": 0.3, "ui": 0.3, "ux": 0.3,
        }),
        _category("Music", {
            "guitar": 1.0, "piano": 1.0, "drums": 1.0, "violin": 1.0, "cello": 1.0,
            "singing": 1.0, "songwriting": 1.0, "dj": 1.0, "music": 1.0, "music theory": 1.0,
            "music production": 1.0, "ukulele": 1.0, "saxophone": 1.0, "bass": 0.6,
            "keyboard": 0.6, "vocal": 0.6, "composition": 0.6, "mixing": 0.6,
            "mastering": 0.6, "audio": 0.6, "instrument": 0.6, "melody": 0.6,
            "harmony": 0.6, "rhythm": 0.6, "jazz": 0.6, "song": 0.6, "sound": 0.3,
            "beat": 0.3, "rock": 0.3, "pop": 0.3, "classical": 0.3,
        }),
        _category("Academic", {
            "mathematics": 1.0, "math": 1.0, "physics": 1.0, "chemistry": 1.0,
            "biology": 1.0, "history": 1.0, "literature": 1.0, "philosophy": 1.0,
            "economics": 1.0, "psychology": 1.0, "sociology": 1.0, "calculus": 1.0,
            "algebra": 1.0, "geometry": 1.0, "statistics": 1.0, "political science": 1.0,
            "tutoring": 0.6, "science": 0.6, "research": 0.6, "academic": 0.6,
            "study": 0.6, "education": 0.6, "theory": 0.15,
        }),
        _category("Photography", {
            "photography": 1.0, "lightroom": 1.0, "camera": 1.0, "photo": 1.0,
            "portrait": 0.6, "exposure": 0.6, "lens": 0.6, "studio": 0.3,
            "wildlife": 0.3, "wedding": 0.3, "landscape": 0.3, "macro": 0.3,
            "film": 0.3, "lighting": 0.3,
        }),
        _category("Fitness", {
            "yoga": 1.0, "pilates": 1.0, "crossfit": 1.0, "zumba": 1.0, "fitness": 1.0,
            "workout": 1.0, "weightlifting": 1.0, "bodybuilding": 1.0, "martial arts": 1.0,
            "climbing": 1.0, "rock climbing": 1.0, "personal training": 1.0,
            "exercise": 0.6, "training": 0.6, "gym": 0.6, "cardio": 0.6, "strength": 0.6,
            "running": 0.6, "cycling": 0.6, "swimming": 0.6, "dance": 0.6, "sports": 0.6,
            "nutrition": 0.3, "flexibility": 0.3, "health": 0.3,
        }),
        _category("Languages", {
            "english": 1.0, "spanish": 1.0, "mandarin": 1.0, "chinese": 1.0,
            "french": 1.0, "german": 1.0, "japanese": 1.0, "arabic": 1.0, "russian": 1.0,
            "italian language": 1.0, "portuguese": 1.0, "korean": 1.0, "hindi": 1.0,
            "sign language": 1.0, "language": 1.0, "translation": 1.0, "linguistics": 1.0,
            "grammar": 0.6, "vocabulary": 0.6, "pronunciation": 0.6, "fluency": 0.6,
            "conversation": 0.6, "interpretation": 0.6, "speaking": 0.3, "writing": 0.3,
            "reading": 0.3,
        }),
        _category("Business", {
            "marketing": 1.0, "business": 1.0, "accounting": 1.0, "sales": 1.0,
            "entrepreneurship": 1.0, "project management": 1.0, "public speaking": 1.0,
            "finance": 1.0, "negotiation": 1.0, "leadership": 1.0, "human resources": 1.0,
            "seo": 1.0, "bookkeeping": 1.0, "management": 0.6, "strategy": 0.6,
            "consulting": 0.6, "presentation": 0.6, "networking": 0.6,
            "customer service": 0.6, "operations": 0.6, "investing": 0.6, "hr": 0.6,
            "communication": 0.3,
        }),
        _category("Culinary", {
            "cooking": 1.0, "baking": 1.0, "pastry": 1.0, "chef": 1.0, "culinary": 1.0,
            "barista": 1.0, "cuisine": 1.0, "meal prep": 1.0, "recipe": 0.6, "food": 0.6,
            "kitchen": 0.6, "wine": 0.6, "coffee": 0.6, "dessert": 0.6, "bread": 0.6,
            "cake": 0.6, "vegan": 0.6, "vegetarian": 0.6, "catering": 0.6, "grilling": 0.6,
            "cook": 0.6, "diet": 0.3, "nutrition": 0.3,
        }),
        _category("Gardening", {
            "gardening": 1.0, "horticulture": 1.0, "botany": 1.0, "composting": 1.0,
            "hydroponics": 1.0, "bonsai": 1.0, "permaculture": 1.0, "garden": 0.6,
            "plant": 0.6, "flower": 0.6, "vegetable": 0.6, "herb": 0.6, "soil": 0.6,
            "greenhouse": 0.6, "farming": 0.6, "agriculture": 0.6, "organic": 0.3,
            "landscape": 0.3, "sustainable": 0.3,
        }),
        _category("DIY & Crafts", {
            "woodworking": 1.0, "knitting": 1.0, "sewing": 1.0, "pottery": 1.0,
            "crochet": 1.0, "embroidery": 1.0, "quilting": 1.0, "jewelry making": 1.0,
            "carpentry": 1.0, "crafts": 1.0, "diy": 1.0, "home repair": 1.0,
            "upcycling": 1.0, "scrapbooking": 1.0, "leatherwork": 1.0, "metalworking": 1.0,
            "craft": 0.6, "handmade": 0.6, "furniture": 0.6, "ceramic": 0.6, "wood": 0.6,
            "jewelry": 0.6, "candle": 0.6, "restoration": 0.6, "knit": 0.6, "repair": 0.3,
            "decorating": 0.3,
        }),
        _category("Wellness", {
            "meditation": 1.0, "mindfulness": 1.0, "aromatherapy": 1.0, "massage": 1.0,
            "reiki": 1.0, "stress management": 1.0, "mental health": 1.0,
            "life coaching": 1.0, "counseling": 1.0, "journaling": 1.0, "wellness": 1.0,
            "therapy": 0.6, "relaxation": 0.6, "breathing": 0.6, "self care": 0.6,
            "spiritual": 0.6, "holistic": 0.6, "sleep": 0.6, "healing": 0.6,
            "personal development": 0.6,
        }),
    ],
}


@lru_cache(maxsize=1)
def get_default_lexicon() -> CategoryLexicon:
    """Build the built-in lexicon (once per process)."""
    return CategoryLexicon.model_validate(DEFAULT_LEXICON_DATA)


def load_lexicon(path: Union[str, Path]) -> CategoryLexicon:
    """Load and validate a lexicon from a YAML file.

    Args:
        path: Path to the lexicon YAML file

    Returns:
        Validated CategoryLexicon

    Raises:
        ConfigurationError: If the file is missing, unparseable or invalid
    """
    lexicon_file = Path(path)

    try:
        with open(lexicon_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Lexicon file not found: {lexicon_file}",
            suggestions=[
                "Check categorization.lexicon_path in config.yaml or LEXICON_PATH",
                "Remove the setting to use the built-in lexicon",
            ],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse lexicon YAML: {e}",
            suggestions=["Check YAML syntax and indentation in the lexicon file"],
        )

    if not data:
        raise ConfigurationError(f"Lexicon file is empty: {lexicon_file}")

    try:
        return CategoryLexicon.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{' -> '.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError(
            f"Lexicon validation failed: {lexicon_file}",
            errors=errors,
            suggestions=[
                "Every category needs a name and at least one keyword",
                "priority must list every category exactly once",
            ],
        )
