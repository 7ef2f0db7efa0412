"""
Este modulo define las fuentes de lecturas para el controller.

Una fuente de datos es un componente que entrega una Lectura por llamada:
- FuenteSimulada: genera temperaturas aleatorias en un rango plausible (desarrollo / presentacion).

Idea de arquitectura:
- El Controller solo conoce el contrato FuenteDatos.leer_lectura().
- Asi se puede cambiar la fuente sin reescribir la logica del Controller
  (por ejemplo, una fuente fija para tests).
"""

import random
from datetime import datetime
from typing import Callable, Optional

from temp_monitor.config.settings import SETTINGS
from temp_monitor.model.lectura import Lectura


# ============================================================
# 0) CONTRATO BASE (interfaz)
# ============================================================

class FuenteDatos:
    """
    Contrato que deben cumplir todas las fuentes de datos.

    El controller trabajara con objetos que implementen:
    - leer_lectura() -> Lectura
    """

    def leer_lectura(self) -> Lectura:
        raise NotImplementedError


# ============================================================
# 1) FUENTE SIMULADA (DESARROLLO / PRESENTACION)
# ============================================================

class FuenteSimulada(FuenteDatos):
    """
    Fuente simulada de temperatura.

    Modelo:
      temperatura = randint(temp_min, temp_max) + random()
    Con los valores por defecto (65, 85) la temperatura siempre cae en [65.0, 86.0).

    La hora se toma del reloj al momento de generar la lectura y se formatea
    con formato_hora ("HH:mm:ss" por defecto).

    rng y reloj se pueden inyectar para tener lecturas reproducibles en tests.
    """

    def __init__(
        self,
        temp_min: int = SETTINGS.temp_min,
        temp_max: int = SETTINGS.temp_max,
        formato_hora: str = SETTINGS.formato_hora,
        rng: Optional[random.Random] = None,
        reloj: Optional[Callable[[], datetime]] = None,
    ):
        self.temp_min = int(temp_min)
        self.temp_max = int(temp_max)

        if self.temp_min > self.temp_max:
            raise ValueError(
                f"Rango invalido: temp_min ({self.temp_min}) no puede ser mayor que temp_max ({self.temp_max})"
            )

        self.formato_hora = formato_hora

        self._rng = rng if rng is not None else random.Random()
        self._reloj = reloj if reloj is not None else datetime.now

    def generar_temperatura(self) -> float:
        return self._rng.randint(self.temp_min, self.temp_max) + self._rng.random()

    def leer_lectura(self) -> Lectura:
        """
        Genera y retorna una Lectura simulada con la hora actual.
        """
        return Lectura(
            timestamp=self._reloj().strftime(self.formato_hora),
            temperatura=self.generar_temperatura(),
        )
