"""Fixed deal and recipe lists served when live data is unavailable."""

from datetime import UTC, datetime, timedelta

from smartplate.domain.deals import Deal, StoreName
from smartplate.domain.recipes import Nutrition, Recipe

DEAL_VALIDITY = timedelta(days=7)

_COLES_SEARCH = "https://www.coles.com.au/search?q="
_WOOLWORTHS_SEARCH = "https://www.woolworths.com.au/shop/search/products?searchTerm="

# name, category, price, original price, description, unit
_COLES_ROWS: tuple[tuple[str, str, float, float, str, str], ...] = (
    ("Baby Spinach", "Vegetables", 2.50, 3.99, "Fresh Baby Spinach 100g", "per pack"),
    ("Greek Yogurt", "Dairy", 4.50, 6.99, "Natural Greek Yogurt 500g", "per tub"),
    ("Beef Mince", "Meat", 7.99, 11.99, "Premium Beef Mince 500g", "per pack"),
    ("Mixed Berries", "Fruit", 3.99, 5.99, "Frozen Mixed Berries 300g", "per pack"),
    ("Pasta", "Pantry", 1.50, 2.50, "Durum Wheat Pasta 500g", "per pack"),
)

_WOOLWORTHS_ROWS: tuple[tuple[str, str, float, float, str, str], ...] = (
    (
        "Atlantic Salmon",
        "Seafood",
        12.99,
        18.99,
        "Fresh Atlantic Salmon Fillets",
        "per kg",
    ),
    (
        "Chicken Breast",
        "Meat",
        8.99,
        12.99,
        "Free Range Chicken Breast Fillets",
        "per kg",
    ),
    ("Avocados", "Vegetables", 1.99, 2.99, "Premium Avocados", "each"),
    ("Brown Rice", "Pantry", 2.50, 3.99, "Long Grain Brown Rice 1kg", "per pack"),
    ("Olive Oil", "Pantry", 6.99, 9.99, "Extra Virgin Olive Oil 500ml", "per bottle"),
)

# store, name, category, price, original price, description, unit, search term
_AGGREGATE_ROWS: tuple[
    tuple[StoreName, str, str, float, float, str, str, str], ...
] = (
    (
        StoreName.WOOLWORTHS,
        "Atlantic Salmon",
        "Seafood",
        12.99,
        18.99,
        "Fresh Atlantic Salmon Fillets",
        "per kg",
        "atlantic salmon",
    ),
    (
        StoreName.WOOLWORTHS,
        "Free Range Chicken Breast",
        "Meat",
        8.99,
        12.99,
        "Free Range Chicken Breast Fillets",
        "per kg",
        "free range chicken breast",
    ),
    (
        StoreName.COLES,
        "Baby Spinach",
        "Vegetables",
        2.50,
        3.99,
        "Fresh Baby Spinach 100g",
        "per pack",
        "baby spinach",
    ),
    (
        StoreName.COLES,
        "Greek Style Yogurt",
        "Dairy",
        4.50,
        6.99,
        "Natural Greek Style Yogurt 500g",
        "per tub",
        "greek style yogurt",
    ),
    (
        StoreName.WOOLWORTHS,
        "Hass Avocados",
        "Fruit",
        1.99,
        2.99,
        "Premium Hass Avocados",
        "each",
        "hass avocado",
    ),
    (
        StoreName.COLES,
        "Beef Mince",
        "Meat",
        7.99,
        11.99,
        "Premium Beef Mince 500g",
        "per pack",
        "beef mince",
    ),
    (
        StoreName.COLES,
        "Mixed Berries",
        "Fruit",
        3.99,
        5.99,
        "Frozen Mixed Berries 300g",
        "per pack",
        "frozen mixed berries",
    ),
    (
        StoreName.WOOLWORTHS,
        "Brown Rice",
        "Pantry",
        2.50,
        3.99,
        "SunRice Long Grain Brown Rice 1kg",
        "per pack",
        "sunrice brown rice",
    ),
    (
        StoreName.WOOLWORTHS,
        "Extra Virgin Olive Oil",
        "Pantry",
        6.99,
        9.99,
        "Cobram Estate Extra Virgin Olive Oil 500ml",
        "per bottle",
        "cobram estate olive oil",
    ),
    (
        StoreName.WOOLWORTHS,
        "Organic Eggs",
        "Dairy",
        4.50,
        6.50,
        "Free Range Organic Eggs 12 pack",
        "per dozen",
        "organic eggs 12 pack",
    ),
    (
        StoreName.WOOLWORTHS,
        "Sweet Potato",
        "Vegetables",
        2.90,
        4.90,
        "Fresh Sweet Potato",
        "per kg",
        "sweet potato",
    ),
    (
        StoreName.COLES,
        "Pasta",
        "Pantry",
        1.50,
        2.50,
        "San Remo Durum Wheat Pasta 500g",
        "per pack",
        "san remo pasta",
    ),
    (
        StoreName.WOOLWORTHS,
        "Wholemeal Bread",
        "Bakery",
        2.20,
        3.50,
        "Tip Top Wholemeal Bread 700g",
        "per loaf",
        "tip top wholemeal bread",
    ),
    (
        StoreName.COLES,
        "Lean Chicken Thighs",
        "Meat",
        6.99,
        9.99,
        "Free Range Chicken Thighs 1kg",
        "per kg",
        "free range chicken thighs",
    ),
    (
        StoreName.COLES,
        "Carrots",
        "Vegetables",
        1.50,
        2.90,
        "Fresh Carrots 1kg",
        "per kg",
        "fresh carrots",
    ),
)


def store_search_url(store: StoreName, term: str) -> str:
    """Build a store search URL for a product name."""
    encoded = term.strip().lower().replace(" ", "%20")
    if store is StoreName.COLES:
        return f"{_COLES_SEARCH}{encoded}"
    return f"{_WOOLWORTHS_SEARCH}{encoded}"


def _store_deals(
    store: StoreName,
    rows: tuple[tuple[str, str, float, float, str, str], ...],
    now: datetime | None,
) -> list[Deal]:
    valid_until = (now or datetime.now(tz=UTC)) + DEAL_VALIDITY
    return [
        Deal(
            name=name,
            category=category,
            price=price,
            original_price=original_price,
            store=store,
            description=description,
            unit=unit,
            valid_until=valid_until,
            product_url=store_search_url(store, name),
            api_source=f"mock-{store.value}",
        )
        for name, category, price, original_price, description, unit in rows
    ]


def coles_fallback_deals(now: datetime | None = None) -> list[Deal]:
    """Fallback Coles specials."""
    return _store_deals(StoreName.COLES, _COLES_ROWS, now)


def woolworths_fallback_deals(now: datetime | None = None) -> list[Deal]:
    """Fallback Woolworths specials."""
    return _store_deals(StoreName.WOOLWORTHS, _WOOLWORTHS_ROWS, now)


def aggregate_fallback_deals(now: datetime | None = None) -> list[Deal]:
    """Static cross-store list served when no adapter produced deals."""
    valid_until = (now or datetime.now(tz=UTC)) + DEAL_VALIDITY
    return [
        Deal(
            name=name,
            category=category,
            price=price,
            original_price=original_price,
            store=store,
            description=description,
            unit=unit,
            valid_until=valid_until,
            product_url=store_search_url(store, term),
            api_source="mock",
        )
        for (
            store,
            name,
            category,
            price,
            original_price,
            description,
            unit,
            term,
        ) in _AGGREGATE_ROWS
    ]


FALLBACK_RECIPES: tuple[Recipe, ...] = (
    Recipe(
        id=1,
        title="Grilled Salmon with Spinach",
        image="https://images.unsplash.com/photo-1467003909585-2f8a72700288?w=400",
        cook_time=25,
        servings=4,
        rating=4.8,
        ingredients=[
            "Atlantic Salmon",
            "Baby Spinach",
            "Lemon",
            "Olive Oil",
            "Garlic",
        ],
        deal_ingredients=["Atlantic Salmon", "Baby Spinach", "Olive Oil"],
        description="Fresh salmon grilled to perfection with sautéed spinach",
        instructions=(
            "1. Season salmon with salt and pepper. 2. Heat oil in pan. "
            "3. Cook salmon 4-5 minutes per side. 4. Sauté spinach with garlic. "
            "5. Serve together."
        ),
        nutrition=Nutrition(calories=320, protein=28, carbs=8, fat=20),
    ),
    Recipe(
        id=2,
        title="Chicken Avocado Bowl",
        image="https://images.unsplash.com/photo-1512058564366-18510be2db19?w=400",
        cook_time=20,
        servings=2,
        rating=4.6,
        ingredients=[
            "Chicken Breast",
            "Avocados",
            "Brown Rice",
            "Greek Yogurt",
            "Lime",
        ],
        deal_ingredients=["Chicken Breast", "Avocados", "Brown Rice", "Greek Yogurt"],
        description="Healthy bowl with grilled chicken and creamy avocado",
        instructions=(
            "1. Cook rice according to package instructions. "
            "2. Season and grill chicken. 3. Slice avocado. "
            "4. Assemble bowl with rice, chicken, avocado, and yogurt."
        ),
        nutrition=Nutrition(calories=450, protein=35, carbs=35, fat=18),
    ),
    Recipe(
        id=3,
        title="Yogurt Berry Parfait",
        image="https://images.unsplash.com/photo-1488477181946-6428a0291777?w=400",
        cook_time=5,
        servings=1,
        rating=4.4,
        ingredients=["Greek Yogurt", "Mixed Berries", "Granola", "Honey"],
        deal_ingredients=["Greek Yogurt", "Mixed Berries"],
        description="Quick and healthy breakfast or snack option",
        instructions=(
            "1. Layer yogurt in glass. 2. Add berries. 3. Top with granola. "
            "4. Drizzle with honey."
        ),
        nutrition=Nutrition(calories=280, protein=15, carbs=35, fat=8),
    ),
    Recipe(
        id=4,
        title="Roast Sweet Potato Pasta",
        image="https://images.unsplash.com/photo-1621996346565-e3dbc646d9a9?w=400",
        cook_time=35,
        servings=4,
        rating=4.5,
        ingredients=[
            "Pasta",
            "Sweet Potato",
            "Baby Spinach",
            "Olive Oil",
            "Parmesan",
        ],
        deal_ingredients=["Pasta", "Sweet Potato", "Baby Spinach", "Olive Oil"],
        description="Comforting pasta with roasted sweet potato and wilted greens",
        instructions=(
            "1. Roast cubed sweet potato with olive oil for 25 minutes. "
            "2. Cook pasta until al dente. 3. Toss pasta with sweet potato "
            "and spinach. 4. Finish with parmesan."
        ),
        nutrition=Nutrition(calories=410, protein=13, carbs=62, fat=12),
    ),
)


def fallback_recipes() -> list[Recipe]:
    """Return copies of the fallback recipes."""
    return [recipe.model_copy(deep=True) for recipe in FALLBACK_RECIPES]
