"""Groups, their sections and the packages they declare."""