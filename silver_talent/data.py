# silver_talent/data.py
# Static lists served to the frontend. Job counts for featured companies are
# computed from the jobs collection at request time.

FEATURED_COMPANIES = [
    {"id": "fc_webweavers", "name": "Web Weavers Inc.", "rating": 4.8,
     "logo": "https://images.unsplash.com/photo-1552664730-d307ca884978?w=200&fit=crop"},
    {"id": "fc_skyhigh", "name": "SkyHigh Cloud Services", "rating": 4.9,
     "logo": "https://images.unsplash.com/photo-1522071820081-009f0129c71c?w=200&fit=crop"},
    {"id": "fc_growthpro", "name": "GrowthPro Agency", "rating": 4.7,
     "logo": "https://images.unsplash.com/photo-1517048676732-d65bc937f952?w=200&fit=crop"},
    {"id": "fc_innovatex", "name": "InnovateX Solutions", "rating": 4.6,
     "logo": "https://images.unsplash.com/photo-1551434678-e076c223a692?w=200&fit=crop"},
    {"id": "fc_dataflow", "name": "DataFlow Systems", "rating": 4.9,
     "logo": "https://images.unsplash.com/photo-1605379399642-870262d3d051?w=200&fit=crop"},
    {"id": "fc_agilesprint", "name": "Agile Sprint Corp", "rating": 4.7,
     "logo": "https://images.unsplash.com/photo-1573497620053-ea5300f94f21?w=200&fit=crop"},
]

JOB_CATEGORIES = [
    "All Categories",
    "Accounting - Finance",
    "Advertising",
    "Agriculture",
    "Airline - Aviation",
    "Banking",
    "Customer Service",
    "Education",
    "Engineering",
    "Healthcare",
    "Human Resources",
    "Information Technology",
    "Legal",
    "Marketing",
    "Sales",
]

LOCATIONS = [
    "All Locations",
    "Remote",
    "New York, NY",
    "San Francisco, CA",
    "London, UK",
    "Toronto, ON",
]

JOB_TYPES = [
    "All Types",
    "Full-time",
    "Part-time",
    "Contract",
    "Internship",
    "Temporary",
]
