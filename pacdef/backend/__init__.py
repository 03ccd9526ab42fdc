"""Package manager backends, their registry and the work to do for each of them."""