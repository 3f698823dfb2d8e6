"""
Fixed data: seed rows for empty collections and the lookup tables used by
the analytics reports.
"""

from datetime import datetime

SAMPLE_TESTIMONIALS = [
    {
        "name": "Sarah Johnson",
        "company": "Global Tech Solutions",
        "position": "CTO",
        "rating": 5,
        "testimonial": "Professional team with great attention to detail. Their expertise in web development exceeded our expectations. Will definitely work with them again on future projects.",
        "featured": True,
        "active": True,
        "displayOrder": 1,
        "date": "2024-12-24",
        "createdAt": datetime(2024, 12, 24),
        "updatedAt": datetime(2024, 12, 24),
    },
    {
        "name": "David Chen",
        "company": "Innovate Inc",
        "position": "Product Manager",
        "rating": 4,
        "testimonial": "The platform they built is intuitive and easy to use. The support team was very helpful throughout the development process. Great communication and timely delivery.",
        "featured": False,
        "active": True,
        "displayOrder": 2,
        "date": "2024-12-20",
        "createdAt": datetime(2024, 12, 20),
        "updatedAt": datetime(2024, 12, 20),
    },
    {
        "name": "Emily Rodriguez",
        "company": "StartupXYZ",
        "position": "Founder & CEO",
        "rating": 5,
        "testimonial": "Exceeded our expectations in every way. The team delivered a high-quality solution that perfectly matched our requirements. Highly recommend their services to anyone looking for professional web development.",
        "featured": True,
        "active": True,
        "displayOrder": 3,
        "date": "2024-12-18",
        "createdAt": datetime(2024, 12, 18),
        "updatedAt": datetime(2024, 12, 18),
    },
    {
        "name": "Michael Thompson",
        "company": "TechCorp Ltd",
        "position": "Lead Developer",
        "rating": 5,
        "testimonial": "Outstanding work quality and timely delivery. The code is clean, well-documented, and follows best practices. Great communication throughout the project lifecycle.",
        "featured": False,
        "active": True,
        "displayOrder": 4,
        "date": "2024-12-15",
        "createdAt": datetime(2024, 12, 15),
        "updatedAt": datetime(2024, 12, 15),
    },
    {
        "name": "Lisa Wang",
        "company": "Digital Dynamics",
        "position": "Marketing Director",
        "rating": 4,
        "testimonial": "Professional service and excellent results. The website they created has significantly improved our online presence and user engagement. Very satisfied with the outcome.",
        "featured": False,
        "active": True,
        "displayOrder": 5,
        "date": "2024-12-10",
        "createdAt": datetime(2024, 12, 10),
        "updatedAt": datetime(2024, 12, 10),
    },
]

SAMPLE_CONTACTS = [
    {
        "name": "Akash Rahman",
        "email": "akash@gmail.com",
        "phone": "01814726978",
        "subject": "Need a website",
        "message": "Hello, I am looking for a professional website for my business. Can you help me with this project?",
        "status": "read",
        "createdAt": datetime(2024, 12, 29),
        "updatedAt": datetime(2024, 12, 29),
        "readAt": datetime(2024, 12, 29),
        "repliedAt": None,
    },
    {
        "name": "Sarah Johnson",
        "email": "sarah@example.com",
        "phone": "01712345678",
        "subject": "Project Inquiry",
        "message": "I would like to discuss a new project for my startup. We need a complete web solution with modern design.",
        "status": "new",
        "createdAt": datetime(2024, 12, 28),
        "updatedAt": datetime(2024, 12, 28),
        "readAt": None,
        "repliedAt": None,
    },
    {
        "name": "Mike Chen",
        "email": "mike@company.com",
        "phone": "01987654321",
        "subject": "Support Request",
        "message": "Having issues with the current system. The dashboard is not loading properly and we need urgent assistance.",
        "status": "replied",
        "createdAt": datetime(2024, 12, 27),
        "updatedAt": datetime(2024, 12, 27),
        "readAt": datetime(2024, 12, 27),
        "repliedAt": datetime(2024, 12, 27),
    },
]

# --- Analytics display tables ---

DISTRIBUTION_COLORS = [
    "#3B82F6", "#10B981", "#FBBF24", "#EF4444", "#8B5CF6",
    "#F59E0B", "#06B6D4", "#84CC16", "#F97316", "#EC4899",
]

COUNTRY_FLAGS = {
    "Bangladesh": "🇧🇩",
    "United States": "🇺🇸",
    "Taiwan": "🇹🇼",
    "India": "🇮🇳",
    "United Kingdom": "🇬🇧",
    "Canada": "🇨🇦",
    "Germany": "🇩🇪",
    "France": "🇫🇷",
    "Japan": "🇯🇵",
    "Australia": "🇦🇺",
}
DEFAULT_FLAG = "🌍"

TOP_PAGE_COLORS = ["bg-yellow-400", "bg-blue-400", "bg-green-400", "bg-purple-400", "bg-red-400"]
