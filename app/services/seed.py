"""
Example catalog content for a fresh project.

Guides and conditions are written with fixed ids through the write pipeline,
so a rejected seed write is reported on the error bus like any other write.
"""

from typing import Dict, List

from app.models.catalog import Condition, TreatmentGuide
from app.store.errors import Operation
from app.store.policy import AuthContext
from app.store.writes import WritePipeline
from app.utils.logger import get_logger

logger = get_logger(__name__)


# ── Treatment Guides ───────────────────────────────────────────────

TREATMENT_GUIDES: List[Dict] = [
    {
        "id": "gentle-neck-stretches",
        "title": "Gentle Neck Stretches",
        "slug": "gentle-neck-stretches",
        "description": "A series of simple stretches to relieve neck tension and improve flexibility.",
        "imageId": "neck-stretches-guide",
        "steps": [
            {
                "title": "Neck Tilt",
                "instructions": (
                    "Gently tilt your head to one side, holding for 15-30 seconds. "
                    "Repeat on the other side."
                ),
            },
            {
                "title": "Neck Turn",
                "instructions": (
                    "Slowly turn your head to look over your shoulder, holding for 15-30 seconds. "
                    "Repeat on the other side."
                ),
            },
            {
                "title": "Forward and Backward Tilt",
                "instructions": (
                    "Gently lower your chin to your chest, then slowly tilt your head back to "
                    "look at the ceiling. Hold each position for 15 seconds."
                ),
            },
        ],
    },
    {
        "id": "core-strengthening-back-pain",
        "title": "Core Strengthening for Back Pain",
        "slug": "core-strengthening-back-pain",
        "description": "Build a stronger core to support your lower back and reduce pain.",
        "imageId": "back-pain-guide",
        "steps": [
            {
                "title": "Pelvic Tilt",
                "instructions": (
                    "Lie on your back with knees bent. Flatten your back against the floor by "
                    "tightening your abdominal muscles. Hold for 10 seconds."
                ),
            },
            {
                "title": "Bridge",
                "instructions": (
                    "Lie on your back with knees bent. Lift your hips off the floor until your "
                    "knees, hips and shoulders form a straight line. Hold for 5 seconds."
                ),
            },
            {
                "title": "Bird-Dog",
                "instructions": (
                    "Start on all fours. Extend one arm straight forward and the opposite leg "
                    "straight back. Hold for 5 seconds, then switch sides."
                ),
            },
        ],
    },
]

# ── Conditions ─────────────────────────────────────────────────────

CONDITIONS: List[Dict] = [
    {
        "id": "neck-pain",
        "name": "Neck Pain (Cervicalgia)",
        "slug": "neck-pain",
        "description": (
            "Pain anywhere from the bottom of your head to the top of your shoulders. Often "
            "caused by poor posture, muscle strain, or underlying medical issues."
        ),
        "treatmentOptions": (
            "Treatment often involves manual therapy, gentle stretching, and strengthening "
            "exercises to improve posture and reduce strain on the neck muscles."
        ),
        "relatedGuideSlugs": ["gentle-neck-stretches"],
    },
    {
        "id": "lower-back-pain",
        "name": "Lower Back Pain",
        "slug": "lower-back-pain",
        "description": (
            "A common musculoskeletal disorder affecting the lumbar region of the spine. It can "
            "range from a dull, constant ache to a sudden, sharp sensation."
        ),
        "treatmentOptions": (
            "Management includes exercise, core strengthening, manual therapy, and education "
            "on posture and body mechanics. Staying active is key."
        ),
        "relatedGuideSlugs": ["core-strengthening-back-pain"],
    },
    {
        "id": "plantar-fasciitis",
        "name": "Plantar Fasciitis",
        "slug": "plantar-fasciitis",
        "description": (
            "Causes stabbing pain in the bottom of your foot near the heel. The pain is usually "
            "the worst with the first few steps after awakening."
        ),
        "treatmentOptions": (
            "Stretching the calf and plantar fascia, using supportive footwear, and specific "
            "exercises are common treatments."
        ),
        "relatedGuideSlugs": [],
    },
]


def seed_example_data(writes: WritePipeline, auth: AuthContext) -> Dict[str, int]:
    """
    Write the example guides, then the example conditions.

    Each document is validated and written on its own; a rejected write is
    logged and seeding continues with the next one.

    Returns:
        ``{"successCount": ..., "totalDocs": ...}``
    """
    batches = [
        ("treatmentGuides", TreatmentGuide, TREATMENT_GUIDES),
        ("conditions", Condition, CONDITIONS),
    ]
    total = sum(len(items) for _, _, items in batches)
    success = 0

    for collection_path, model, items in batches:
        for item in items:
            doc = model.from_dict(item, item["id"])
            result = writes.set(
                f"{collection_path}/{doc.id}", doc.to_dict(), auth, operation=Operation.CREATE
            )
            if result.ok:
                success += 1
            else:
                logger.error(f"Failed to seed {collection_path}/{doc.id}")

    logger.info(f"Seeded {success} of {total} example documents")
    return {"successCount": success, "totalDocs": total}
