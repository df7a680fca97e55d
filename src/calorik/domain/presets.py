"""Common foods offered for quick logging."""

from dataclasses import dataclass

from calorik.domain.foods import NewFoodItem


@dataclass(frozen=True)
class PresetFood:
    """A preset food with per-serving nutrition."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float

    def to_new_item(self) -> NewFoodItem:
        """Convert the preset into a loggable food item."""
        return NewFoodItem(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


COMMON_FOODS: tuple[PresetFood, ...] = (
    # Dairy & eggs
    PresetFood("Hard-boiled egg (large)", 78, 6, 0.6, 5),
    PresetFood("Omelette (2 eggs)", 180, 12, 1, 14),
    PresetFood("Cottage cheese 5% (100 g)", 98, 11, 3.4, 5),
    PresetFood("Greek yogurt 2% (150 g)", 110, 15, 6, 2),
    PresetFood("Milk 3% (cup, 240 ml)", 150, 8, 12, 8),
    PresetFood("Yellow cheese 28% (slice)", 110, 7, 1, 9),
    # Proteins
    PresetFood("Chicken breast (100 g, cooked)", 165, 31, 0, 3.6),
    PresetFood("Salmon (100 g, baked)", 206, 22, 0, 12),
    PresetFood("Tuna in oil (drained can)", 190, 29, 0, 8),
    PresetFood("Tofu (100 g)", 76, 8, 1.9, 4.8),
    # Grains & carbs
    PresetFood("White bread (slice)", 75, 2.5, 14, 1),
    PresetFood("Whole wheat bread (slice)", 70, 3, 12, 1),
    PresetFood("White rice (cup, cooked)", 205, 4.3, 45, 0.4),
    PresetFood("Pasta (cup, cooked)", 220, 8, 43, 1.3),
    PresetFood("Potato (medium, baked)", 160, 4, 37, 0.2),
    PresetFood("Quinoa (cup, cooked)", 222, 8, 39, 3.6),
    # Fruits
    PresetFood("Apple (medium)", 95, 0.5, 25, 0.3),
    PresetFood("Banana (medium)", 105, 1.3, 27, 0.4),
    PresetFood("Orange (medium)", 62, 1.2, 15, 0.2),
    PresetFood("Grapes (cup)", 104, 1, 27, 0.2),
    # Vegetables
    PresetFood("Cucumber (medium)", 15, 0.7, 3.6, 0.1),
    PresetFood("Tomato (medium)", 22, 1, 5, 0.2),
    PresetFood("Carrot (medium)", 25, 0.6, 6, 0.1),
    PresetFood("Broccoli (cup, chopped)", 31, 2.6, 6, 0.3),
    PresetFood("Small vegetable salad (no dressing)", 50, 2, 10, 0.5),
    # Fats & nuts
    PresetFood("Avocado (half)", 160, 2, 9, 15),
    PresetFood("Almonds (quarter cup)", 207, 7.6, 7, 18),
    PresetFood("Olive oil (tablespoon)", 120, 0, 0, 14),
)


def find_preset(name: str) -> PresetFood | None:
    """Return the preset with a matching name, ignoring case."""
    wanted = name.strip().lower()
    for preset in COMMON_FOODS:
        if preset.name.lower() == wanted:
            return preset
    return None
