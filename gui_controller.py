import time
import dearpygui.dearpygui as dpg


def _make_callbacks(shared):
    def pause_cb():
        shared['toggle_pause'] = True
    def reset_cb():
        shared['reset_world'] = True
    def exit_cb():
        shared['__exit__'] = True
    def active_cb(sender, app_data, user_data):
        # user_data is the magnet id; the main loop pops the whole request dict
        requests = dict(shared.get('set_active') or {})
        requests[user_data] = bool(app_data)
        shared['set_active'] = requests
    return pause_cb, reset_cb, exit_cb, active_cb


def _status_line(shared):
    magnets = shared.get('magnets') or []
    active = [str(m['id']) for m in magnets if m.get('active')]
    paused = ' (paused)' if shared.get('paused', False) else ''
    return f"tick={shared.get('tick', 0)}, active magnets: {', '.join(active) or 'none'}{paused}"


def run_gui(shared):
    """
    Run DearPyGui in its own process. Writes requests into `shared`;
    the pygame loop applies them between frames and publishes the
    magnet snapshot back under 'magnets'.
    """
    dpg.create_context()

    pause_cb, reset_cb, exit_cb, active_cb = _make_callbacks(shared)

    with dpg.window(label="Magnet Controls", tag="controls_window", width=320, height=300):
        dpg.add_text("Click on a magnet to make it attract metal objects around it.", wrap=300)
        dpg.add_separator()
        dpg.add_text("Active magnets")
        for m in shared.get('magnets') or []:
            dpg.add_checkbox(label=f"Magnet {m['id']} ({m['polarity']})", tag=f"magnet_{m['id']}",
                             default_value=bool(m.get('active')), user_data=m['id'], callback=active_cb)
        dpg.add_separator()
        dpg.add_button(label="Reset Magnets", callback=lambda s, a, u: reset_cb())
        dpg.add_button(label="Pause / Toggle", callback=lambda s, a, u: pause_cb())
        dpg.add_button(label="Exit", callback=lambda s, a, u: exit_cb())
        dpg.add_spacer()
        dpg.add_text("Status:", tag="status_label")
        dpg.add_text("", tag="status_text")

    dpg.create_viewport(title='Magnet Controls', width=340, height=320)
    dpg.set_primary_window("controls_window", True)
    dpg.setup_dearpygui()
    dpg.show_viewport()

    try:
        while not shared.get('__exit__', False) and dpg.is_dearpygui_running():
            dpg.set_value("status_text", _status_line(shared))
            # reflect toggles made in the pygame window
            for m in shared.get('magnets') or []:
                tag = f"magnet_{m['id']}"
                if dpg.does_item_exist(tag):
                    dpg.set_value(tag, bool(m.get('active')))
            dpg.render_dearpygui_frame()
            time.sleep(0.01)
    finally:
        dpg.destroy_context()
