"""
Definicion de la estructura de datos del sistema.

- Lectura: una muestra de temperatura con su hora de captura.

Es el contrato comun entre Controller (que la genera), Model (que la guarda)
y View (que la muestra). Es inmutable: una vez creada no se modifica.
"""

from dataclasses import dataclass

from temp_monitor.config.settings import SETTINGS


@dataclass(frozen=True)
class Lectura:
    timestamp: str        # hora de pared "HH:mm:ss" al momento de crearla
    temperatura: float    # grados

    @property
    def temperatura_str(self) -> str:
        return formatear_temperatura(self.temperatura)


def formatear_temperatura(valor: float, decimales: int = None, unidad: str = None) -> str:
    """
    Formatea una temperatura para mostrar en pantalla.

    Ejemplo con los valores por defecto: 72.456 -> "72.5°F"
    """
    if decimales is None:
        decimales = SETTINGS.decimales
    if unidad is None:
        unidad = SETTINGS.unidad

    return f"{float(valor):.{int(decimales)}f}{unidad}"
