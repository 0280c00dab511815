"""Default product categories offered when listing or creating products."""

DEFAULT_CATEGORIES = [
    {
        "id": "textiles",
        "name": "Textiles & Fabrics",
        "description": "Handwoven fabrics, embroidery, traditional clothing",
    },
    {
        "id": "pottery",
        "name": "Pottery & Ceramics",
        "description": "Clay pots, decorative ceramics, terracotta items",
    },
    {
        "id": "jewelry",
        "name": "Jewelry & Accessories",
        "description": "Traditional jewelry, handmade accessories",
    },
    {
        "id": "woodwork",
        "name": "Woodwork & Carving",
        "description": "Wooden crafts, sculptures, furniture",
    },
    {
        "id": "metalwork",
        "name": "Metalwork",
        "description": "Brass items, copper crafts, traditional metalwork",
    },
    {
        "id": "painting",
        "name": "Painting & Art",
        "description": "Traditional paintings, folk art, canvas work",
    },
    {
        "id": "other",
        "name": "Other Crafts",
        "description": "Various other traditional crafts and handmade items",
    },
]
