"""
Bootstrap seed catalog.

Nine fixed domains installed when storage is initialized. The article and
project counts are placeholder values shown on the dashboard; no seeded
Article or Project records back them.
"""
from datetime import datetime
from typing import List, Tuple

from app.domain.entities import Domain, DomainData, field_values

SEED_CATALOG: Tuple[Tuple[str, DomainData], ...] = (
    ("embedded-systems", DomainData(
        name="Embedded Systems",
        description="Bare-metal programming, RTOS, device drivers, bootloaders, and debugging techniques.",
        icon="fas fa-microchip",
        color="blue",
        progress=75,
        articles_count=42,
        projects_count=8,
    )),
    ("ai-ml", DomainData(
        name="AI & Machine Learning",
        description="TinyML, TensorFlow Lite, deep learning basics, and edge device optimization.",
        icon="fas fa-brain",
        color="purple",
        progress=50,
        articles_count=28,
        projects_count=5,
    )),
    ("operating-systems", DomainData(
        name="Operating Systems",
        description="Linux kernel internals, Android OS development, iOS/macOS, and RTOS concepts.",
        icon="fas fa-server",
        color="green",
        progress=25,
        articles_count=18,
        projects_count=3,
    )),
    ("hardware-architectures", DomainData(
        name="Hardware Architectures",
        description="ARM Cortex-M/A, RISC-V, x86, GPU, and parallel processing architectures.",
        icon="fas fa-memory",
        color="red",
        progress=100,
        articles_count=35,
        projects_count=12,
    )),
    ("programming-languages", DomainData(
        name="Programming Languages",
        description="C, C++, Rust, Python, Shell scripting, and Assembly programming.",
        icon="fas fa-code",
        color="indigo",
        progress=75,
        articles_count=52,
        projects_count=15,
    )),
    ("tools-devops", DomainData(
        name="Tools & DevOps",
        description="Git, Jenkins, CI/CD, Docker, virtualization, and version control workflows.",
        icon="fas fa-tools",
        color="teal",
        progress=50,
        articles_count=24,
        projects_count=6,
    )),
    ("networking-protocols", DomainData(
        name="Networking & Protocols",
        description="TCP/UDP, MQTT, HTTP/HTTPS, WiFi, BLE, LoRa, CAN, and automotive protocols.",
        icon="fas fa-network-wired",
        color="cyan",
        progress=25,
        articles_count=19,
        projects_count=4,
    )),
    ("iot-cloud", DomainData(
        name="IoT & Cloud",
        description="IoT architecture, gateways, edge devices, backend servers, and cloud deployment.",
        icon="fas fa-cloud",
        color="orange",
        progress=50,
        articles_count=22,
        projects_count=7,
    )),
    ("product-development", DomainData(
        name="Product Development",
        description="Product design, prototyping, testing, validation, and agile development lifecycle.",
        icon="fas fa-rocket",
        color="pink",
        progress=25,
        articles_count=15,
        projects_count=2,
    )),
)


def seed_domains(now: datetime) -> List[Domain]:
    """Build the seed catalog as Domain entities stamped with `now`, in catalog order."""
    return [
        Domain(id=domain_id, created_at=now, updated_at=now, **field_values(data))
        for domain_id, data in SEED_CATALOG
    ]
