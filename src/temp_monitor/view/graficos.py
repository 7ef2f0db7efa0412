"""
Helpers de graficos para la vista: historial -> DataFrame.

El historial se guarda con la lectura mas nueva primero; para graficar
se invierte (eje X de la mas antigua a la mas nueva).

El eje X es la posicion "n" (0, 1, 2, ...), no la hora: "HH:MM:SS" como texto
se ordena alfabeticamente y "00:00:00" quedaria antes que "23:59:58".
"""

from typing import Sequence

import pandas as pd

from temp_monitor.model.lectura import Lectura

COLUMNAS_GRAFICO = ["n", "hora", "temperatura"]


def historial_a_df(hist: Sequence[Lectura]) -> pd.DataFrame:
    if hist is None or len(hist) == 0:
        return pd.DataFrame(columns=COLUMNAS_GRAFICO)

    cronologico = list(reversed(hist))
    data = {
        "n": list(range(len(cronologico))),
        "hora": [l.timestamp for l in cronologico],
        "temperatura": [l.temperatura for l in cronologico],
    }
    return pd.DataFrame(data)


def tabla_lecturas(hist: Sequence[Lectura]) -> pd.DataFrame:
    """Tabla para la lista de lecturas (mas nueva primero, temperatura formateada)."""
    return pd.DataFrame(
        {
            "Hora": [l.timestamp for l in hist],
            "Temperatura": [l.temperatura_str for l in hist],
        }
    )


def se_puede_graficar(hist: Sequence[Lectura]) -> bool:
    """
    La linea solo tiene sentido con al menos 2 puntos y con algo de variacion
    (si todas las temperaturas son iguales no hay rango para escalar).
    """
    if hist is None or len(hist) < 2:
        return False

    temps = [l.temperatura for l in hist]
    return max(temps) - min(temps) > 0
