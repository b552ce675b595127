"""Canned data served by MockCoachesService."""

COACHES = [
    {
        "id": "582846d5c951184d705b65d1",
        "name": "Kristin Watson",
        "imageUrl": "",
        "motivationPitch": "Certified Personal Yoga Trainer",
        "rating": 4.96,
        "summary": "Twelve years of teaching yoga to clients of every level.",
        "specializations": ["Yoga", "Flexibility", "Meditation"],
    },
    {
        "id": "582846d5c951184d705b65d2",
        "name": "Wade Warren",
        "imageUrl": "",
        "motivationPitch": "Professional Strength Coach",
        "rating": 4.85,
        "summary": "Strength and conditioning built on progressive overload and good form.",
        "specializations": ["Weights", "Strength", "Powerlifting"],
    },
    {
        "id": "582846d5c951184d705b65d3",
        "name": "Cameron Williamson",
        "imageUrl": "",
        "motivationPitch": "Cardio and Endurance Specialist",
        "rating": 4.7,
        "summary": "Running, cycling and interval programs for every fitness level.",
        "specializations": ["Cardio", "Running", "HIIT"],
    },
]

# coach id -> day -> time slots by part of day
TIME_SLOTS = {
    "582846d5c951184d705b65d1": {
        "2025-06-02": {
            "morning": ["08:00 - 09:00", "10:00 - 11:00"],
            "afternoon": ["15:00 - 16:00"],
        },
        "2025-06-03": {
            "morning": ["09:00 - 10:00"],
            "afternoon": ["16:00 - 17:00", "18:00 - 19:00"],
        },
    },
    "582846d5c951184d705b65d2": {
        "2025-06-02": {
            "morning": ["11:00 - 12:00"],
            "afternoon": ["17:00 - 18:00"],
        },
    },
}

FEEDBACK = {
    "582846d5c951184d705b65d1": [
        {
            "id": "fb-1",
            "userId": "u-1",
            "userName": "Jenny Wilson",
            "userImage": "",
            "rating": "5",
            "comment": "Calm, precise and always ready with an easier variation.",
            "date": "2025-05-12",
        },
        {
            "id": "fb-2",
            "userId": "u-2",
            "userName": "Guy Hawkins",
            "userImage": "",
            "rating": "4",
            "comment": "Great session, my back feels much better.",
            "date": "2025-05-20",
        },
        {
            "id": "fb-3",
            "userId": "u-3",
            "userName": "Bessie Cooper",
            "userImage": "",
            "rating": "3",
            "comment": "Good class but a bit too slow for me.",
            "date": "2025-04-28",
        },
    ],
}
