import logging

from .schemas import InsertDoctor

logger = logging.getLogger(__name__)

DEFAULT_DOCTORS = [
    InsertDoctor(
        name="Dr. Sarah Johnson",
        specialization="Cardiology",
        bio="Expert cardiologist with 15 years experience.",
        image_url="https://images.unsplash.com/photo-1559839734-2b71ea197ec2?auto=format&fit=crop&q=80",
        availability="Mon-Fri 09:00-17:00",
        experience=15,
        rating="4.9",
    ),
    InsertDoctor(
        name="Dr. Michael Chen",
        specialization="Pediatrics",
        bio="Friendly pediatrician loved by kids.",
        image_url="https://images.unsplash.com/photo-1612349317150-e413f6a5b16d?auto=format&fit=crop&q=80",
        availability="Mon-Wed, Fri 10:00-16:00",
        experience=10,
        rating="4.8",
    ),
    InsertDoctor(
        name="Dr. Emily Wilson",
        specialization="Neurology",
        bio="Specializing in neurological disorders.",
        image_url="https://images.unsplash.com/photo-1594824476967-48c8b964273f?auto=format&fit=crop&q=80",
        availability="Tue-Thu 08:00-14:00",
        experience=12,
        rating="4.9",
    ),
]


def seed_doctors(storage):
    """Insere os médicos padrão se a tabela estiver vazia. Retorna quantos criou."""
    if storage.get_doctors():
        return 0
    for doctor in DEFAULT_DOCTORS:
        storage.create_doctor(doctor)
    logger.info("Seeded %d doctors", len(DEFAULT_DOCTORS))
    return len(DEFAULT_DOCTORS)
