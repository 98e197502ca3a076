# заливка демо-данных в локальную БД, чтобы было что листать
import asyncio
import random
import sys

from sentencias.db.migrate import upgrade_to_head
from sentencias.db.repo.document_sql import SqlAlchemyDocumentStore
from sentencias.db.repo.schemas import COLLECTION, DecisionRecord

SALAS = {
    1: "Sala Constitucional",
    2: "Sala Político Administrativa",
    3: "Sala Electoral",
    4: "Sala de Casación Civil",
    5: "Sala de Casación Penal",
    6: "Sala de Casación Social",
}
MESES = [
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
]


async def seed(count: int) -> None:
    store = SqlAlchemyDocumentStore()
    rnd = random.Random(2009)
    for i in range(count):
        sala_num = rnd.choice(list(SALAS))
        anio = str(rnd.randint(2000, 2024))
        record = DecisionRecord(
            id=None,
            anio=anio,
            mes=rnd.choice(MESES),
            dia=f"{rnd.randint(1, 28):02d}",
            sala=SALAS[sala_num],
            sala_num=sala_num,
            expediente=f"{anio[2:]}-{rnd.randint(1, 9999):04d}",
            identificador=f"{i + 1}-{anio}",
            url=f"https://example.org/decisiones/{anio}/{i + 1}.html",
        )
        await store.add(COLLECTION, record)


if __name__ == "__main__":
    upgrade_to_head()
    n = int(sys.argv[1]) if len(sys.argv) > 1 else 500
    asyncio.run(seed(n))
    print(f"seeded {n} decisions")
