class Config:

    # =====================
    # Network
    # =====================
    # Shape: [inputs, hidden..., outputs]
    network_shape = [2, 4, 2, 1]
    input_ids = ["x1", "x2"]

    # Functions (see playground.network.functions)
    activation = "tanh"
    output_activation = "tanh"
    regularization = None           # "L1", "L2" or None

    # Initialisation
    init_zero = False
    seed = None

    # =====================
    # Training
    # =====================
    cost = "square"
    learning_rate = 0.03
    regularization_rate = 0.0
    batch_size = 10
    epochs = 500

    # =====================
    # Output
    # =====================
    log_path = "out/training.log"
    stats_path = "out/stats.csv"
    log_interval = 50
