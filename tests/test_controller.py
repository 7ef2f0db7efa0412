import asyncio
import itertools
import random
from datetime import datetime, timedelta

import pytest

from temp_monitor.config.settings import SETTINGS
from temp_monitor.controller.controller import (
    EstadoController,
    MonitorController,
    construir_controller_simulado,
)
from temp_monitor.controller.fuentes import FuenteDatos, FuenteSimulada
from temp_monitor.model.historial import Historial
from temp_monitor.model.lectura import Lectura


class FuenteFija(FuenteDatos):
    """Entrega lecturas numeradas: 70.0, 71.0, 72.0, ..."""

    def __init__(self):
        self._n = itertools.count()

    def leer_lectura(self) -> Lectura:
        i = next(self._n)
        return Lectura(timestamp=f"00:00:{i % 60:02d}", temperatura=70.0 + i)


class FakeReloj:
    """Reloj de pared controlado por el test."""

    def __init__(self, inicio: datetime):
        self.ahora = inicio

    def avanzar(self, segundos: float) -> None:
        self.ahora += timedelta(seconds=segundos)

    def __call__(self) -> datetime:
        return self.ahora


def _ctrl(intervalo_s=2.0, max_lecturas=20):
    return MonitorController(
        fuente=FuenteFija(),
        historial=Historial(max_lecturas=max_lecturas),
        intervalo_s=intervalo_s,
    )


def test_tick_agrega_lectura():
    ctrl = _ctrl()

    lectura = ctrl.tick()

    assert lectura.temperatura == 70.0
    assert ctrl.get_historial() == (lectura,)


def test_tick_en_pausa_no_hace_nada():
    ctrl = _ctrl()
    ctrl.tick()

    assert ctrl.toggle_pause() == EstadoController.PAUSED
    for _ in range(10):
        assert ctrl.tick() is None

    assert len(ctrl.get_historial()) == 1

    assert ctrl.toggle_pause() == EstadoController.RUNNING
    ctrl.tick()
    assert len(ctrl.get_historial()) == 2


def test_estado_inicial_running():
    assert _ctrl().get_estado() == EstadoController.RUNNING


def test_intervalo_invalido():
    with pytest.raises(ValueError):
        MonitorController(intervalo_s=0)


def test_tick_si_corresponde_primera_llamada_inmediata():
    ctrl = _ctrl(intervalo_s=2.0)

    assert ctrl.tick_si_corresponde(ahora_s=100.0) is True
    assert ctrl.tick_si_corresponde(ahora_s=101.0) is False
    assert ctrl.segundos_hasta_proximo_tick(ahora_s=101.0) == pytest.approx(1.0)
    assert ctrl.tick_si_corresponde(ahora_s=102.0) is True
    assert len(ctrl.get_historial()) == 2


def test_tick_si_corresponde_atrasado_hace_un_solo_tick():
    reloj = FakeReloj(datetime(2024, 5, 1, 12, 0, 0))
    ctrl = MonitorController(
        fuente=FuenteSimulada(rng=random.Random(7), reloj=reloj),
        historial=Historial(),
        intervalo_s=2.0,
    )
    ctrl.tick_si_corresponde(ahora_s=0.0)

    # la pagina estuvo 10 s sin re-ejecutarse
    reloj.avanzar(10)
    assert ctrl.tick_si_corresponde(ahora_s=10.0) is True

    hist = ctrl.get_historial()
    assert len(hist) == 2
    assert [l.timestamp for l in hist] == ["12:00:10", "12:00:00"]

    # el proximo se agenda desde ahora, no desde el tick perdido
    assert ctrl.segundos_hasta_proximo_tick(ahora_s=10.0) == pytest.approx(2.0)
    assert ctrl.tick_si_corresponde(ahora_s=11.0) is False


def test_tick_si_corresponde_en_pausa_avanza_reloj():
    ctrl = _ctrl(intervalo_s=2.0)
    ctrl.tick_si_corresponde(ahora_s=0.0)
    ctrl.toggle_pause()

    assert ctrl.tick_si_corresponde(ahora_s=10.0) is True
    assert len(ctrl.get_historial()) == 1

    ctrl.toggle_pause()
    # al reanudar no hay rafaga: el proximo tick es a los 12 s
    assert ctrl.tick_si_corresponde(ahora_s=11.0) is False
    assert ctrl.tick_si_corresponde(ahora_s=12.0) is True
    assert len(ctrl.get_historial()) == 2


def test_reset():
    ctrl = _ctrl()
    ctrl.tick_si_corresponde(ahora_s=0.0)
    ctrl.toggle_pause()

    ctrl.reset()

    assert ctrl.get_estado() == EstadoController.RUNNING
    assert ctrl.get_historial() == ()
    assert ctrl.segundos_hasta_proximo_tick(ahora_s=1.0) == 0.0
    assert ctrl.tick_si_corresponde(ahora_s=1.0) is True


def test_get_estadisticas():
    ctrl = _ctrl()
    for _ in range(3):
        ctrl.tick()

    stats = ctrl.get_estadisticas()
    assert stats.actual == 72.0
    assert stats.promedio == pytest.approx(71.0)
    assert stats.minimo == 70.0
    assert stats.maximo == 72.0


def test_loop_asyncio_genera_lecturas_y_se_cancela():
    ctrl = _ctrl(intervalo_s=0.01)

    async def escenario():
        ctrl.iniciar_tarea()
        assert ctrl.corriendo

        with pytest.raises(RuntimeError):
            ctrl.iniciar_tarea()

        await asyncio.sleep(0.1)
        await ctrl.detener()

        assert not ctrl.corriendo
        return len(ctrl.get_historial())

    n = asyncio.run(escenario())
    assert n >= 2

    # despues de detener no se agregan mas lecturas
    assert len(ctrl.get_historial()) == n


def test_loop_asyncio_respeta_pausa():
    ctrl = _ctrl(intervalo_s=0.01)
    ctrl.toggle_pause()

    async def escenario():
        ctrl.iniciar_tarea()
        await asyncio.sleep(0.05)
        await ctrl.detener()

    asyncio.run(escenario())
    assert len(ctrl.get_historial()) == 0


def test_detener_sin_tarea_no_falla():
    asyncio.run(_ctrl().detener())


def test_controller_simulado_usa_settings():
    ctrl = construir_controller_simulado()

    assert ctrl.intervalo_s == SETTINGS.intervalo_s == 2.0
    assert ctrl.historial.max_lecturas == SETTINGS.max_lecturas == 20

    lectura = ctrl.tick()
    assert 65.0 <= lectura.temperatura < 86.0
    assert len(lectura.timestamp) == 8
