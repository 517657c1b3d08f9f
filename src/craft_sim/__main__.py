from craft_sim.app import run

if __name__ == "__main__":
    run()
