"""
Historial de lecturas del sistema (Reading Store).

Responsabilidad:
- Guardar las ultimas N lecturas, la mas nueva primero (N = SETTINGS.max_lecturas).
- Responder estadisticas: actual, promedio, minimo y maximo.
- Guardar la bandera de pausa (running <-> paused).
- Avisar a los observadores (la View) cada vez que algo cambia.

Notas:
- La secuencia se guarda como tupla y se reemplaza completa en cada push.
  Quien lea el historial siempre ve una secuencia completa, nunca una a medio actualizar.
- Las estadisticas se recalculan desde cero en cada consulta (son a lo mas N valores).
- Con el historial vacio, current/average/min/max retornan None.
  Para mostrar 0.0 sin lecturas usar Estadisticas.con_sentinela().
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterator, List, Optional, Tuple

from temp_monitor.config.settings import SETTINGS
from temp_monitor.model.lectura import Lectura

logger = logging.getLogger(__name__)

# callback(lecturas, pausado)
Observador = Callable[[Tuple[Lectura, ...], bool], None]


@dataclass(frozen=True)
class Estadisticas:
    actual: Optional[float]
    promedio: Optional[float]
    minimo: Optional[float]
    maximo: Optional[float]
    cantidad: int

    @property
    def vacio(self) -> bool:
        return self.cantidad == 0

    def con_sentinela(self, valor: float = 0.0) -> "Estadisticas":
        """Reemplaza los None por un valor fijo (0.0 por defecto): sin lecturas se muestra 0.0."""
        def _o(x):
            return valor if x is None else x

        return replace(
            self,
            actual=_o(self.actual),
            promedio=_o(self.promedio),
            minimo=_o(self.minimo),
            maximo=_o(self.maximo),
        )


class Historial:
    """
    Secuencia acotada de lecturas (la mas nueva primero) + bandera de pausa.
    """

    def __init__(self, max_lecturas: int = SETTINGS.max_lecturas):
        max_lecturas = int(max_lecturas)
        if max_lecturas < 1:
            raise ValueError("max_lecturas debe ser mayor o igual a 1")

        self.max_lecturas = max_lecturas

        self._lecturas: Tuple[Lectura, ...] = ()
        self._pausado = False
        self._observadores: List[Observador] = []

    # ----------------------------
    # Secuencia
    # ----------------------------

    @property
    def lecturas(self) -> Tuple[Lectura, ...]:
        return self._lecturas

    def __len__(self) -> int:
        return len(self._lecturas)

    def __iter__(self) -> Iterator[Lectura]:
        return iter(self._lecturas)

    def push(self, lectura: Lectura) -> None:
        """
        Agrega una lectura al inicio.
        Si se pasa del maximo, se descarta la mas antigua (la ultima).
        """
        nuevas = (lectura,) + self._lecturas
        self._lecturas = nuevas[: self.max_lecturas]

        logger.debug("push %s %.2f (total=%d)", lectura.timestamp, lectura.temperatura, len(self._lecturas))
        self._notificar()

    def limpiar(self) -> None:
        self._lecturas = ()
        self._notificar()

    # ----------------------------
    # Estadisticas
    # ----------------------------

    def current(self) -> Optional[Lectura]:
        lecturas = self._lecturas
        return lecturas[0] if lecturas else None

    def average(self) -> Optional[float]:
        return _promedio(self._temperaturas())

    def min(self) -> Optional[float]:
        temps = self._temperaturas()
        return min(temps) if temps else None

    def max(self) -> Optional[float]:
        temps = self._temperaturas()
        return max(temps) if temps else None

    def estadisticas(self) -> Estadisticas:
        """
        Calcula todas las estadisticas sobre una misma lectura de la tupla,
        asi actual/promedio/min/max siempre son coherentes entre si.
        """
        lecturas = self._lecturas
        temps = [l.temperatura for l in lecturas]

        if not temps:
            return Estadisticas(actual=None, promedio=None, minimo=None, maximo=None, cantidad=0)

        return Estadisticas(
            actual=temps[0],
            promedio=_promedio(temps),
            minimo=min(temps),
            maximo=max(temps),
            cantidad=len(temps),
        )

    def _temperaturas(self) -> List[float]:
        return [l.temperatura for l in self._lecturas]

    # ----------------------------
    # Pausa
    # ----------------------------

    @property
    def pausado(self) -> bool:
        return self._pausado

    def toggle_pause(self) -> bool:
        """Invierte la bandera de pausa y retorna el nuevo valor."""
        self._pausado = not self._pausado
        logger.info("Historial %s", "pausado" if self._pausado else "reanudado")
        self._notificar()
        return self._pausado

    # ----------------------------
    # Observadores
    # ----------------------------

    def suscribir(self, callback: Observador) -> Callable[[], None]:
        """
        Registra un observador. Se llama con (lecturas, pausado) en cada cambio.
        Retorna una funcion que, al llamarla, cancela la suscripcion.
        """
        self._observadores.append(callback)

        def desuscribir() -> None:
            if callback in self._observadores:
                self._observadores.remove(callback)

        return desuscribir

    def _notificar(self) -> None:
        lecturas = self._lecturas
        pausado = self._pausado

        # copia de la lista: un observador puede desuscribirse durante el aviso
        for callback in list(self._observadores):
            try:
                callback(lecturas, pausado)
            except Exception:
                logger.exception("Observador %r fallo al recibir el historial", callback)


def _promedio(valores: List[float]) -> Optional[float]:
    if not valores:
        return None
    return sum(valores) / len(valores)
