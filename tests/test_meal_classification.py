from recipe_importer.models import MealType
from recipe_importer.services.meal_classification import classify_meal_types


def test_breakfast_keywords():
    assert MealType.BREAKFAST in classify_meal_types("Pancakes", "Fluffy breakfast pancakes")


def test_dinner_keywords():
    assert MealType.DINNER in classify_meal_types("Grilled Steak", "Hearty dinner main course")


def test_no_keyword_defaults_to_dinner_only():
    assert classify_meal_types("Foo", "Bar") == frozenset({MealType.DINNER})


def test_several_meal_types_can_match():
    assert classify_meal_types("Chicken Soup", "") == frozenset({MealType.LUNCH, MealType.DINNER})


def test_keywords_match_as_substrings():
    assert MealType.BREAKFAST in classify_meal_types("Eggplant Parmesan", None)


def test_matching_is_case_insensitive():
    assert classify_meal_types("SUNDAY ROAST", "") == frozenset({MealType.DINNER})
    assert classify_meal_types("BLT SANDWICH", "") == frozenset({MealType.LUNCH})


def test_classification_is_pure():
    first = classify_meal_types("Salmon salad", "A light lunch")
    second = classify_meal_types("Salmon salad", "A light lunch")
    assert first == second == frozenset({MealType.LUNCH})


def test_missing_inputs_default_to_dinner():
    assert classify_meal_types(None, None) == frozenset({MealType.DINNER})
