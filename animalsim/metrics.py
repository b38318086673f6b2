import time

from prometheus_client import CollectorRegistry, Counter, Gauge


class SimulationMetrics:
    """Prometheus view of a running Simulation.

    Each instance registers its metrics in its own registry, so the runner
    passes ``metrics.registry`` to ``start_http_server``.
    """

    def __init__(self, simulation, registry=None):
        self.registry = registry if registry is not None else CollectorRegistry()
        r = self.registry
        self.metric_running_seconds = Counter('animalsim_running_seconds', 'Time the simulation has been running in seconds', registry=r)
        self.metric_generation_number = Gauge('animalsim_generation_number', 'Number of completed generations', registry=r)
        self.metric_generation_age = Gauge('animalsim_generation_age_ticks', 'Ticks elapsed in the current generation', registry=r)
        self.metric_animal_count = Gauge('animalsim_animal_count', 'Number of animals in the world', registry=r)
        self.metric_food_count = Gauge('animalsim_food_count', 'Number of food items in the world', registry=r)
        self.metric_food_eaten = Gauge('animalsim_food_eaten', 'Food eaten so far in the current generation', registry=r)
        self.metric_best_satiation = Gauge('animalsim_best_satiation', 'Highest satiation among living animals', registry=r)
        self.metric_min_fitness = Gauge('animalsim_last_generation_min_fitness', 'Min fitness of the last finished generation', registry=r)
        self.metric_max_fitness = Gauge('animalsim_last_generation_max_fitness', 'Max fitness of the last finished generation', registry=r)
        self.metric_avg_fitness = Gauge('animalsim_last_generation_avg_fitness', 'Average fitness of the last finished generation', registry=r)
        self.metric_topology_input_size = Gauge('animalsim_brain_topology_input_size', 'Input size of the brain topology', registry=r)
        self.metric_topology_hidden_layers = Gauge('animalsim_brain_topology_hidden_layers', 'Number of hidden layers in the brain topology', registry=r)
        self.metric_topology_output_size = Gauge('animalsim_brain_topology_output_size', 'Output size of the brain topology', registry=r)

        topology = simulation.config.topology
        self.metric_running_seconds.inc(0)
        self.metric_topology_input_size.set(topology[0])
        self.metric_topology_hidden_layers.set(len(topology) - 2)
        self.metric_topology_output_size.set(topology[-1])
        self.last_update = time.monotonic()
        self.update(simulation)

    def update(self, simulation):
        now = time.monotonic()
        self.metric_running_seconds.inc(now - self.last_update)
        self.last_update = now

        snapshot = simulation.world()
        self.metric_generation_number.set(simulation.generation)
        self.metric_generation_age.set(simulation.age)
        self.metric_animal_count.set(len(snapshot.animals))
        self.metric_food_count.set(len(snapshot.foods))
        self.metric_food_eaten.set(simulation.food_eaten)
        self.metric_best_satiation.set(max((a.satiation for a in snapshot.animals), default=0))

    def record_generation(self, stats):
        self.metric_min_fitness.set(stats.min_fitness)
        self.metric_max_fitness.set(stats.max_fitness)
        self.metric_avg_fitness.set(stats.avg_fitness)
