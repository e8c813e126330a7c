from catalog.models import Product

MAX_RECOMMENDATIONS = 5


def recommend_for_goals(goals, limit=MAX_RECOMMENDATIONS):
    """
    Products whose key_benefits overlap the given goals, best rated first.

    key_benefits is a JSON list, so the overlap check runs in python rather
    than as a db lookup (sqlite has no json containment).
    """
    goals = set(goals or [])
    if not goals:
        return []

    matches = [p for p in Product.objects.all() if p.matches_goals(goals)]
    matches.sort(key=lambda p: (-p.average_rating, -p.pk))
    return matches[:limit]
