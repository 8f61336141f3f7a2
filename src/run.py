import asyncio
from config import RingConfig
from hash_ring import HashRing
from placement import coverage, key_distribution, remapped_keys
from store import RingStore
from logger import Logger


async def main(cfg: RingConfig = None, nodes=("server-1", "server-2", "server-3"), n_keys=3000):
    cfg = cfg or RingConfig.from_env()
    logger = Logger.get_logger("simulation", level=cfg.log_level, log_dir=cfg.log_dir)
    logger.info("[SYSTEM] Hash ring simulation started.")

    try:
        ring = HashRing.from_config(cfg)
        for node_id in nodes:
            ring.add(node_id)
        logger.info(f"[SYSTEM] Built {ring}")

        keys = [f"key:{i}" for i in range(n_keys)]
        dist = key_distribution(ring, keys)
        share = coverage(ring)
        for node_id in ring.nodes:
            logger.info(
                f"[RING] {node_id}: keys={dist[node_id]} ({dist[node_id] / n_keys:.1%}), "
                f"hash space={share[node_id]:.1%}"
            )

        before = ring.copy()
        removed = ring.nodes[len(ring.nodes) // 2]
        ring.remove(removed)
        moved = remapped_keys(before, ring, keys)
        logger.info(
            f"[RING] Removed {removed}: {len(moved)}/{n_keys} keys remapped "
            f"({len(moved) / n_keys:.1%}), expected about {1 / before.size:.1%}"
        )

        store = RingStore.from_url(cfg.redis_url, prefix=cfg.key_prefix, logger=logger)
        try:
            await store.save("simulation", before)
        finally:
            await store.close()

        logger.info("[SYSTEM] Simulation completed successfully.")
    except Exception as e:
        logger.error(f"[SYSTEM] Simulation failed: {e}", exc_info=True)


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
