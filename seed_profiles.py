# seed_profiles.py
from datetime import date
from dotenv import load_dotenv

load_dotenv()

from app import create_app
from app.extensions import db
from app.helpers.account import get_or_create_profile_for_email
from app.helpers.profile_levels import calculate_profile_level

GENERAL = {
    "first_name": "Test",
    "last_name": "Member",
    "gender": "Female",
    "date_of_birth": date(1990, 1, 1),
    "postcode": "3000",
}

DEMOGRAPHIC = {
    "interests": ["Photography"],
    "hobbies": ["Hiking"],
    "occupation": "Designer",
    "marital_status": "Single",
    "income_range": "50k-75k",
    "education": "Bachelor's degree",
    "ethnicity": "Prefer not to say",
    "languages_spoken": ["English"],
    "home_ownership": "Renting",
    "vehicle_ownership": "Car",
    "pet_ownership": "Dog",
}

def main(per_rank=5):
    app = create_app()
    with app.app_context():
        db.create_all()

        for rank in (1, 2, 3, 4):
            for i in range(per_rank):
                p = get_or_create_profile_for_email(f"rank{rank}-{i + 1}@example.com", nickname=f"rank{rank}_{i + 1}")
                if rank >= 2:
                    for k, v in GENERAL.items():
                        setattr(p, k, v)
                if rank >= 3:
                    for k, v in DEMOGRAPHIC.items():
                        setattr(p, k, v)
                if rank == 4:
                    p.verification_status = "approved"
                db.session.commit()

                level = calculate_profile_level(p).level
                print(f"{p.email}: rank {level}")

if __name__ == "__main__":
    main()
