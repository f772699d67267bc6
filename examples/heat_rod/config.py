import os

#######################################################################################################################
######################################## PROBLEM CONFIGURATION ########################################################
#######################################################################################################################

root = os.path.dirname(os.path.abspath(__file__))

offline_data_directory = os.path.join(root, "offline_data")  # directory of the offline/online hand-off

n_nodes = 200  # number of interior nodes of the finite element discretization

param_min = [0.5, 0.5, 0.5]  # lower bounds of the conductivities (left, right) and of the source intensity
param_max = [5.0, 5.0, 2.0]  # upper bounds of the conductivities (left, right) and of the source intensity

# specifics of the time discretization
time_specifics = {
    'final_time': 0.5,  # final time of the simulation
    'number_of_time_instances': 50,  # number of time steps
    'theta': 1.0  # parameter of the theta-method (1.0 --> Backward Euler)
}

n_snapshots = 10  # number of parameter values used to compute the snapshots
N_max = 12  # maximal dimension of the reduced basis
offline_seed = 0  # seed for the generation of the snapshots parameters

n_online_queries = 5  # number of online queries
online_seed = 123  # seed for the generation of the online parameters
N_online = [2, 4, 8, 12]  # basis dimensions tested online

write_representors = True  # store the raw Riesz representors to an HDF5 file
