"""
Vista Streamlit para Temp Monitor (MVC)

Esta vista NO implementa el modelo ni la logica del sistema.
Solo:
- crea un controller por sesion (st.session_state)
- avanza el timer via ctrl.tick_si_corresponde() en cada re-ejecucion
- muestra estadisticas, grafico y lista de lecturas
- boton Pause / Resume -> ctrl.toggle_pause()

Contrato con Controller:
- ctrl.get_estado()
- ctrl.toggle_pause()
- ctrl.tick_si_corresponde()
- ctrl.segundos_hasta_proximo_tick()
- ctrl.get_historial()
- ctrl.get_estadisticas()
- ctrl.reset()

Nota:
- Streamlit no tiene timer propio: esta vista re-ejecuta la pagina y consulta
  el historial (polling). Para hosts que no se re-ejecutan, el controller ofrece
  iniciar_tarea() / detener() (loop asyncio) y el historial ofrece suscribir()
  para recibir (lecturas, pausado) en cada cambio.
"""

import time

import streamlit as st

from temp_monitor.config.settings import SETTINGS
from temp_monitor.controller.controller import (
    EstadoController,
    construir_controller_simulado,
)
from temp_monitor.model.lectura import formatear_temperatura
from temp_monitor.view.graficos import historial_a_df, se_puede_graficar, tabla_lecturas


# ============================================================
# Helpers de session_state
# ============================================================

def _get_ctrl():
    ctrl = st.session_state.get("ctrl")
    if ctrl is None:
        ctrl = construir_controller_simulado()
        st.session_state["ctrl"] = ctrl
    return ctrl


# ============================================================
# UI principal
# ============================================================

def iniciar():
    st.set_page_config(page_title=SETTINGS.titulo_app, layout="centered")

    st.title(SETTINGS.titulo_app)

    ctrl = _get_ctrl()

    # Avanza el timer antes de dibujar (puede haber pasado mas de un intervalo)
    ctrl.tick_si_corresponde()

    estado = ctrl.get_estado()

    # ------------------------------
    # Boton Pause / Resume
    # ------------------------------
    col_pausa, col_reset = st.columns([3, 1])

    etiqueta = "Resume" if estado == EstadoController.PAUSED else "Pause"
    b_pausa = col_pausa.button(etiqueta, use_container_width=True)
    b_reset = col_reset.button("Reset", use_container_width=True)

    if b_pausa:
        ctrl.toggle_pause()
        st.rerun()

    if b_reset:
        ctrl.reset()
        st.rerun()

    # ------------------------------
    # Estadisticas
    # ------------------------------
    stats = ctrl.get_estadisticas().con_sentinela()

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Current", formatear_temperatura(stats.actual))
    c2.metric("Average", formatear_temperatura(stats.promedio))
    c3.metric("Min", formatear_temperatura(stats.minimo))
    c4.metric("Max", formatear_temperatura(stats.maximo))

    # ------------------------------
    # Grafico
    # ------------------------------
    hist = ctrl.get_historial()

    if se_puede_graficar(hist):
        df = historial_a_df(hist).set_index("n")[["temperatura"]]
        st.line_chart(df, height=200)

    # ------------------------------
    # Lista de lecturas
    # ------------------------------
    st.subheader("Readings:")

    if len(hist) == 0:
        st.caption("Waiting for the first reading...")
    else:
        st.dataframe(tabla_lecturas(hist), hide_index=True, use_container_width=True)

    # ------------------------------
    # Auto-refresh: espera hasta el proximo tick (o el refresco de UI, lo que sea menor)
    # ------------------------------
    espera = min(SETTINGS.refresco_ui_s, ctrl.segundos_hasta_proximo_tick())
    time.sleep(max(0.05, espera))
    st.rerun()


if __name__ == "__main__":
    iniciar()
