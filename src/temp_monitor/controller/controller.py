"""
Controller del sistema (capa Controller del patron MVC).

El Controller es responsable de:
- Coordinar la fuente de lecturas (FuenteDatos) con el historial (Historial).
- Ejecutar el "tick": si no esta en pausa, pedir una lectura y guardarla.
- Llevar la cadencia fija (una lectura cada intervalo_s).
- Exponer el comando de pausa para la View.

Hay dos formas de mover el timer:
- tick_si_corresponde(): la View (Streamlit) se re-ejecuta seguido y el controller
  decide cuantos ticks tocan segun el tiempo transcurrido.
- ejecutar() / iniciar_tarea(): tarea asyncio que hace tick + sleep para siempre,
  hasta que se cancela con detener().

Contrato con la View:
- ctrl.get_estado()
- ctrl.toggle_pause()
- ctrl.tick_si_corresponde()
- ctrl.segundos_hasta_proximo_tick()
- ctrl.get_historial()
- ctrl.get_estadisticas()
- ctrl.reset()
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Optional

from temp_monitor.config.settings import SETTINGS
from temp_monitor.controller.fuentes import FuenteDatos, FuenteSimulada
from temp_monitor.model.historial import Estadisticas, Historial
from temp_monitor.model.lectura import Lectura

logger = logging.getLogger(__name__)


class EstadoController(str, Enum):
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


class MonitorController:

    def __init__(
        self,
        fuente: Optional[FuenteDatos] = None,
        historial: Optional[Historial] = None,
        intervalo_s: float = SETTINGS.intervalo_s,
    ):
        intervalo_s = float(intervalo_s)
        if intervalo_s <= 0:
            raise ValueError("intervalo_s debe ser mayor que 0")

        self.fuente = fuente if fuente is not None else FuenteSimulada()
        self.historial = historial if historial is not None else Historial()
        self.intervalo_s = intervalo_s

        # Instante (time.monotonic) en que toca el proximo tick. None = aun no parte.
        self._proximo_tick_s: Optional[float] = None

        # Tarea asyncio del loop periodico (si se usa)
        self._tarea: Optional[asyncio.Task] = None

    # ----------------------------
    # Estado / pausa
    # ----------------------------

    def get_estado(self) -> EstadoController:
        return EstadoController.PAUSED if self.historial.pausado else EstadoController.RUNNING

    def toggle_pause(self) -> EstadoController:
        self.historial.toggle_pause()
        return self.get_estado()

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self) -> Optional[Lectura]:
        """
        Un paso del generador.

        - En pausa: no hace nada y retorna None.
        - Si no: lee una lectura de la fuente, la guarda en el historial y la retorna.
        """
        if self.historial.pausado:
            return None

        lectura = self.fuente.leer_lectura()
        self.historial.push(lectura)
        return lectura

    def tick_si_corresponde(self, ahora_s: Optional[float] = None) -> bool:
        """
        Hace un tick si ya paso el intervalo desde el anterior.

        - La primera llamada hace un tick inmediato.
        - A lo mas un tick por llamada: si la pagina se atraso varios intervalos,
          no se recuperan (cada lectura lleva la hora real en que se genero).
        - El proximo tick se agenda desde ahora_s, tambien en pausa,
          asi al reanudar no hay rafaga de lecturas.

        Retorna True si hizo tick (en pausa cuenta, aunque no genere lectura).
        """
        if ahora_s is None:
            ahora_s = time.monotonic()

        if self._proximo_tick_s is not None and ahora_s < self._proximo_tick_s:
            return False

        self._proximo_tick_s = ahora_s + self.intervalo_s
        self.tick()
        return True

    def segundos_hasta_proximo_tick(self, ahora_s: Optional[float] = None) -> float:
        if self._proximo_tick_s is None:
            return 0.0
        if ahora_s is None:
            ahora_s = time.monotonic()
        return max(0.0, self._proximo_tick_s - ahora_s)

    # ----------------------------
    # Loop periodico (asyncio)
    # ----------------------------

    async def ejecutar(self) -> None:
        """
        Loop del dashboard en vivo: tick y espera intervalo_s, para siempre.
        Solo termina cuando se cancela la tarea.
        """
        logger.info("Loop de lecturas iniciado (cada %.2f s)", self.intervalo_s)
        try:
            while True:
                self.tick()
                await asyncio.sleep(self.intervalo_s)
        finally:
            logger.info("Loop de lecturas detenido")

    def iniciar_tarea(self) -> asyncio.Task:
        """
        Lanza ejecutar() como tarea en el event loop actual.
        Debe llamarse desde codigo async (con un loop corriendo).
        """
        if self._tarea is not None and not self._tarea.done():
            raise RuntimeError("El loop de lecturas ya esta corriendo")

        self._tarea = asyncio.get_running_loop().create_task(self.ejecutar())
        return self._tarea

    @property
    def corriendo(self) -> bool:
        return self._tarea is not None and not self._tarea.done()

    async def detener(self) -> None:
        """Cancela la tarea del loop y espera que termine."""
        tarea = self._tarea
        self._tarea = None

        if tarea is None or tarea.done():
            return

        tarea.cancel()
        try:
            await tarea
        except asyncio.CancelledError:
            pass

    # ----------------------------
    # Consultas para la View
    # ----------------------------

    def get_historial(self):
        return self.historial.lecturas

    def get_estadisticas(self) -> Estadisticas:
        return self.historial.estadisticas()

    def reset(self) -> None:
        """Vacia el historial, reinicia la cadencia y vuelve a RUNNING."""
        if self.historial.pausado:
            self.historial.toggle_pause()
        self.historial.limpiar()
        self._proximo_tick_s = None
        logger.info("Controller reiniciado")


# ============================================================
# Fabrica
# ============================================================

def construir_controller_simulado() -> MonitorController:
    fuente = FuenteSimulada(
        temp_min=SETTINGS.temp_min,
        temp_max=SETTINGS.temp_max,
        formato_hora=SETTINGS.formato_hora,
    )
    historial = Historial(max_lecturas=SETTINGS.max_lecturas)
    return MonitorController(fuente=fuente, historial=historial, intervalo_s=SETTINGS.intervalo_s)
