import logging
from multiprocessing import Process, Manager

import pygame

import constants
import gui_controller as gui_ctrl
from magnetism.interaction import MAGNET, InteractionHandler, entity_under_cursor
from magnetism.world import World
from utils import load_config, run_settings, setup_logging, simulation_settings

PANEL_ERRORS = (EOFError, BrokenPipeError, ConnectionError)

# commands handle_event() hands back to the frame loop
QUIT = 'quit'
PAUSE = 'pause'

MAGNET_KEYS = '123456789'


def publish(shared, world, paused, magnets=True):
    """Write the state the control panel displays into the shared dict."""
    if magnets:
        shared['magnets'] = world.snapshot()['magnets']
    shared['tick'] = world.tick_count
    shared['paused'] = paused


def apply_panel_requests(shared, world):
    """Apply control panel requests. Returns (toggle_pause, exit)."""
    if shared.pop('reset_world', False):
        world.reset()
    for magnet_id, active in (shared.pop('set_active', None) or {}).items():
        world.set_magnet_active(magnet_id, active)
    return shared.pop('toggle_pause', False), shared.get('__exit__', False)


def handle_event(event, world, handler, pressed, include_particles=False):
    """
    Feed one pygame event to the interaction handler or the world.

    `pressed` is the (kind, id) under the pointer at button-down, or None;
    a click is a press and release on the same magnet. Returns the updated
    `pressed` and a command for the frame loop (QUIT, PAUSE or None).
    """
    if event.type == pygame.QUIT:
        return pressed, QUIT
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        mx, my = event.pos
        pressed = entity_under_cursor(world, mx, my, include_particles)
        handler.pointer_down(pressed, mx, my)
    elif event.type == pygame.MOUSEMOTION:
        handler.pointer_move(*event.pos)
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        handler.pointer_up()
        if pressed is not None and pressed[0] == MAGNET and \
                entity_under_cursor(world, *event.pos) == pressed:
            handler.click(pressed[1])
        pressed = None
    elif event.type == pygame.WINDOWFOCUSLOST:
        handler.cancel()
        pressed = None
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_r:
            handler.cancel()
            world.reset()
        elif event.key == pygame.K_SPACE:
            return pressed, PAUSE
        elif event.key == pygame.K_ESCAPE:
            return pressed, QUIT
        # str.isdigit() also accepts '²' and friends, which int() rejects
        elif event.unicode and event.unicode in MAGNET_KEYS:
            magnet_id = int(event.unicode)
            if world.get_magnet(magnet_id) is not None:
                world.toggle_magnet_active(magnet_id)
    return pressed, None


def draw_hud(screen, fonts, world, paused):
    title_font, info_font = fonts
    title = title_font.render(constants.TITLE.upper(), True, constants.TEXT_COLOR)
    screen.blit(title, title.get_rect(midtop=(constants.WIDTH // 2, 12)))

    lines = [
        "Click on a magnet to make it attract metal objects around it.",
        "Drag magnets to move them.  R: reset   SPACE: pause   1-9: toggle magnet",
    ]
    for i, line in enumerate(lines):
        surf = info_font.render(line, True, constants.INFO_COLOR)
        screen.blit(surf, surf.get_rect(midbottom=(constants.WIDTH // 2, constants.HEIGHT - 36 + i * 22)))

    active = sum(1 for m in world.magnets if m.active)
    count = info_font.render(f"Active magnets: {active}/{len(world.magnets)}", True, constants.BLACK)
    screen.blit(count, (10, 10))
    if paused:
        pause_text = title_font.render("PAUSED", True, constants.BLACK)
        screen.blit(pause_text, (constants.WIDTH - pause_text.get_width() - 10, 10))


def main(config_path=constants.DEFAULT_CONFIG_PATH):
    config = load_config(config_path)
    setup_logging(config)
    settings = simulation_settings(config)
    run_params = run_settings(config)
    log_throttle = run_params['log_throttle_ticks']

    logging.info("--- Magnet Simulation Starting ---")

    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()
    fonts = (pygame.font.Font(None, 40), pygame.font.Font(None, 24))

    world = World(pull_radius=settings['pull_radius'], step_size=settings['step_size'],
                  strict=settings['strict'])
    handler = InteractionHandler(world, drag_threshold=settings['drag_threshold'],
                                 particles_draggable=settings['particles_draggable'])

    # the panel only needs a fresh magnet list after the world changed
    magnets_changed = True

    def mark_changed(_world):
        nonlocal magnets_changed
        magnets_changed = True

    # spawn DearPyGui controller process (protected inside main)
    shared = None
    gui_proc = None
    if run_params['control_panel']:
        mgr = Manager()
        shared = mgr.dict()
        shared['reset_world'] = False
        shared['__exit__'] = False
        publish(shared, world, False)
        world.subscribe(mark_changed)
        gui_proc = Process(target=gui_ctrl.run_gui, args=(shared,), daemon=True)
        gui_proc.start()

    running = True
    paused = False
    pressed = None

    while running:
        for event in pygame.event.get():
            pressed, command = handle_event(event, world, handler, pressed, settings['particles_draggable'])
            if command == QUIT:
                running = False
            elif command == PAUSE:
                paused = not paused

        # --- Handle GUI updates ---
        if shared is not None:
            try:
                toggle_pause, exit_requested = apply_panel_requests(shared, world)
                if toggle_pause:
                    paused = not paused
                if exit_requested:
                    running = False
                publish(shared, world, paused, magnets=magnets_changed)
                magnets_changed = False
            except PANEL_ERRORS as e:
                logging.warning(f"Control panel unavailable, continuing without it: {e}")
                world.unsubscribe(mark_changed)
                shared = None

        # --- Update ---
        if not paused or world.tick_pending:
            world.update()
            if world.tick_count % log_throttle == 0:
                positions = ", ".join(f"{p.id}=({p.x:.1f}, {p.y:.1f})" for p in world.particles)
                logging.info(f"Tick {world.tick_count}: particles {positions}")

        # --- Draw ---
        screen.fill(constants.BACKGROUND)
        world.draw(screen)
        draw_hud(screen, fonts, world, paused)

        pygame.display.flip()
        clock.tick(constants.FPS)

    # cleanup: signal GUI to exit and join
    if gui_proc is not None:
        try:
            if shared is not None:
                shared['__exit__'] = True
            gui_proc.join(timeout=1.0)
        except PANEL_ERRORS:
            pass

    pygame.quit()
    logging.info("--- Magnet Simulation Shutting Down ---")


if __name__ == "__main__":
    main()
